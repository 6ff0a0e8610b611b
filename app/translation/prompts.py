from app.language.detector import AUTO

LANGUAGE_NAMES = {
    "ta": "Tamil",
    "hi": "Hindi",
    "en": "English",
}

_SPECIALIZED_TEMPLATE = """Translate this {language} legal/property text accurately to English.
Keep legal and land-registry terminology precise (survey numbers, document numbers, boundaries, parties).
Preserve numbers and formatting. Do not add commentary.
---
{chunk}"""

_GENERIC_TEMPLATE = """Translate this {language} text to English accurately.
Preserve numbers and formatting. Do not add commentary.
---
{chunk}"""


def language_name(code: str) -> str:
    if code == AUTO:
        return "source-language"
    return LANGUAGE_NAMES.get(code, code)


def build_translation_prompt(chunk: str, source_language: str, specialized_language: str) -> str:
    """Build the prompt for one chunk.

    The specialized source language gets domain wording for legal/property
    documents; every other language, including ``"auto"``, gets the generic one.
    """
    template = (
        _SPECIALIZED_TEMPLATE
        if source_language == specialized_language
        else _GENERIC_TEMPLATE
    )
    return template.format(language=language_name(source_language), chunk=chunk)
