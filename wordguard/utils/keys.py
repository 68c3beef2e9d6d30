# wordguard/utils/keys.py
class KeyFactory:
    """Генерирует стандартизированные ключи для Redis."""

    PREFIX = "wordguard"

    # --- Словарь запрещённых слов ---
    @staticmethod
    def bad_words(group_id: int) -> str:
        """HASH слово -> id записи."""
        return f"{KeyFactory.PREFIX}:badwords:{group_id}"

    @staticmethod
    def bad_words_sequence() -> str:
        return f"{KeyFactory.PREFIX}:badwords:seq"

    @staticmethod
    def bad_words_groups() -> str:
        return f"{KeyFactory.PREFIX}:badwords:groups"

    # --- Игнорируемые слова ---
    @staticmethod
    def ignored_words(group_id: int) -> str:
        return f"{KeyFactory.PREFIX}:ignored:{group_id}"

    @staticmethod
    def ignored_words_sequence() -> str:
        return f"{KeyFactory.PREFIX}:ignored:seq"

    @staticmethod
    def ignored_words_groups() -> str:
        return f"{KeyFactory.PREFIX}:ignored:groups"

    # --- Белый список ---
    @staticmethod
    def whitelist(group_id: int) -> str:
        return f"{KeyFactory.PREFIX}:whitelist:{group_id}"

    @staticmethod
    def whitelist_seeded(group_id: int) -> str:
        return f"{KeyFactory.PREFIX}:whitelist:seeded:{group_id}"

    # --- История сообщений ---
    @staticmethod
    def message_history(group_id: int, user_id: int) -> str:
        """ZSET: score = unix time, member = JSON сообщения."""
        return f"{KeyFactory.PREFIX}:history:{group_id}:{user_id}"

    @staticmethod
    def message_history_index() -> str:
        return f"{KeyFactory.PREFIX}:history:index"

    # --- Журнал нарушений ---
    @staticmethod
    def violation_log() -> str:
        return f"{KeyFactory.PREFIX}:violations"
