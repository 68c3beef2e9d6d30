# ===============================================================
# Файл: wordguard/texts/messages.py
# Описание: Тексты ответов бота в чате.
# ===============================================================

DEFAULT_WARNING_TEMPLATE = (
    "{at} You triggered a forbidden word check: {words}\n"
    "Current violations: {count}/{maxCount}\n"
    "{remaining} more violations will result in a {muteMinutes} min mute."
)

MUTE_NOTICE = "{at} has been muted for {muteMinutes} min."

GROUP_ONLY = "This command must be used in a group."
GROUP_NOT_CONFIGURED = "This group is not configured for monitoring."
STORE_ERROR = "❌ Storage error, the change was not saved. Try again later."

SPECIFY_WORD = "Please specify a word."
WORD_ADDED = '✅ Added "{0}" to local dictionary.'
WORD_EXISTS = "Word already exists."
WORD_REMOVED = '🗑 Removed "{0}".'
WORD_NOT_FOUND = "Word not found."
NO_FORBIDDEN_WORDS = "No forbidden words."
FORBIDDEN_WORDS_LIST = "Forbidden words ({0}):\n{1}"

IGNORED_WORD_ADDED = '✅ Added "{0}" to ignored words list.'
IGNORED_WORD_REMOVED = '🗑 Removed "{0}" from ignored words list.'
NO_IGNORED_WORDS = "No ignored words."
IGNORED_WORDS_LIST = "Ignored words ({0}):\n{1}"

SPECIFY_USER_ID = "Please specify user ID (or reply to a message)."
ALREADY_WHITELISTED = "Already whitelisted."
USER_ADDED_WHITELIST = "✅ User {0} added to whitelist."
NOT_IN_WHITELIST = "Not in whitelist."
USER_REMOVED_WHITELIST = "🗑 User {0} removed from whitelist."
NO_WHITELIST_USERS = "Whitelist is empty."
WHITELIST_USERS_LIST = "Whitelist users ({0}):\n{1}"

STATS_HEADER = "Current monitoring stats (active window):\nViolators: {0}"
RECORDS_CLEARED = "✅ Records cleared for user {0}."
NO_ACTIVE_RECORDS = "No active records for user {0}."
ALL_RECORDS_CLEARED = "✅ Cleared all violation records for this group ({0} records)."

SPECIFY_TEXT = "Please specify text."
CHECK_SAFE = "✅ Safe."
CHECK_DETECTED = "🚨 Detected: {0}"

NO_HISTORY = "No recent history for user {0}."
HISTORY_LIST = "Recent history for user {0}:\n{1}"

GROUP_INFO = (
    "Group info ({0}):\n"
    "Status: {1}\n"
    "Methods: {2}\n"
    "Smart verify: {3}\n"
    "Threshold: {4} in {5} min\n"
    "Mute: {6} min\n"
    "Whitelist: {7}"
)

REPORT_SENT = "📧 Report sent successfully to {0} receivers. Count: {1}"
REPORT_FAILED = "❌ Failed to send email: {0}"
NO_VIOLATIONS = "No violations found in the specified period."
SMTP_NOT_CONFIGURED = "SMTP not configured or no receivers."

CACHE_CLEANED = "🧹 History cleanup done: {0} entries removed, {1} throttle entries dropped."
