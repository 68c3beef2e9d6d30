# =================================================================================
# Файл: wordguard/utils/text_utils.py
# Описание: Утилиты для безопасной обработки текста: маскирование,
#           разбор устаревшего формата словаря, очистка JSON от LLM.
# =================================================================================

import re
from typing import List, Tuple

MASK_CHAR = "*"

# (код.слово): код не содержит точки, слово берётся нежадно до ')'
LEGACY_PAIR_RE = re.compile(r"\(([^.]+)\.(.+?)\)")
LEGACY_SPLIT_RE = re.compile(r"[,，\r\n]")


def mask_word(word: str, mask: str = MASK_CHAR) -> str:
    """Возвращает маску той же длины, что и слово."""
    return mask * len(word)


def mask_occurrences(text: str, word: str, mask: str = MASK_CHAR) -> str:
    """Заменяет каждое вхождение слова маской той же длины."""
    if not word:
        return text
    return text.replace(word, mask_word(word, mask))


def parse_legacy_dict(dict_str: str) -> List[Tuple[str, str]]:
    """
    Разбирает словарь в устаревшем формате.

    Поддерживаются два варианта:
    - строгий: "(1.слово)(2.другое слово)", пары (код, слово);
    - простой список через запятую (включая полноширинную) или перевод строки,
      если в строке нет скобок. Коды назначаются по порядку.

    Returns:
        Список пар (код, слово)
    """
    result: List[Tuple[str, str]] = []
    if not dict_str or not dict_str.strip():
        return result

    if "(" in dict_str and ")" in dict_str:
        for match in LEGACY_PAIR_RE.finditer(dict_str):
            result.append((match.group(1).strip(), match.group(2).strip()))

    if not result:
        words = [w.strip() for w in LEGACY_SPLIT_RE.split(dict_str)]
        for index, word in enumerate((w for w in words if w), start=1):
            result.append((str(index), word))

    return result


def escape_html(text: str) -> str:
    """
    Экранирует специальные HTML-символы (<, >, &) для безопасного вывода.
    """
    if not text:
        return ""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def clean_json_string(raw_json: str) -> str:
    """
    Очищает строку, которая должна содержать JSON, от лишних символов
    и markdown-разметки, часто добавляемой LLM.
    """
    if not raw_json:
        return ""
    cleaned = re.sub(r'```[a-zA-Z]*\n(.*?)\n```', r'\1', raw_json, flags=re.DOTALL)
    start = -1
    end = -1
    for i, char in enumerate(cleaned):
        if char in '{[':
            start = i
            break
    for i, char in enumerate(reversed(cleaned)):
        if char in '}]':
            end = len(cleaned) - i
            break

    if start != -1 and end != -1 and start < end:
        return cleaned[start:end]
    return raw_json.strip()


def clip_text(text: str, max_length: int) -> str:
    """
    Обрезает текст до максимальной длины, стараясь не разрывать слова.
    """
    if len(text) <= max_length:
        return text

    clipped = text[:max_length]
    last_space = clipped.rfind(' ')
    if last_space != -1:
        return clipped[:last_space] + "..."
    return clipped + "..."
