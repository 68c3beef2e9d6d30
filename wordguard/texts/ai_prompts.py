# ===============================================================
# Файл: wordguard/texts/ai_prompts.py
# Описание: Промпты для AI-классификатора нарушений.
# ===============================================================
from typing import Iterable

from wordguard.utils.models import HistoryMessage


def get_abuse_classifier_prompt() -> str:
    """Системный промпт классификатора. Требует строго JSON-ответ."""
    return (
        "You are a content moderator for a group chat. "
        "Decide whether the CURRENT message is abusive: insults, harassment, hate speech, "
        "threats, sexual content, or other language that violates common community rules. "
        "If a HISTORY block is present, use it only as context to understand the CURRENT "
        "message (quotes, jokes, sarcasm); judge only the CURRENT message. "
        "Respond ONLY with a JSON object with exactly these fields: "
        '"isAbuse" (boolean), '
        '"level" (number from 0.0 to 1.0, your confidence that the message is abusive), '
        '"type" (short category name, e.g. "insult", "hate", "threat", "sexual", "none"), '
        '"sentence" (the offending excerpt from the CURRENT message, or an empty string). '
        "Do not include explanations or markdown."
    )


def build_context_prompt(history: Iterable[HistoryMessage], current: str) -> str:
    """
    Собирает составной текст для повторной проверки:
    блок истории (от старых к новым) и блок текущего сообщения.
    """
    lines = [f"- {item.content}" for item in history]
    history_block = "\n".join(lines) if lines else "(no recent messages)"
    return f"[HISTORY]\n{history_block}\n\n[CURRENT]\n{current}"
