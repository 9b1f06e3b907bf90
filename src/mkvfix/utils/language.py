"""Language code conversion utilities."""

# ISO 639-1 (2-letter) to ISO 639-2/B (3-letter) mapping.
# mkvmerge reports track languages as ISO 639-2 codes.
ISO_639_1_TO_639_2 = {
    "en": "eng",  # English
    "es": "spa",  # Spanish
    "fr": "fre",  # French
    "de": "ger",  # German
    "it": "ita",  # Italian
    "pt": "por",  # Portuguese
    "ru": "rus",  # Russian
    "ja": "jpn",  # Japanese
    "ko": "kor",  # Korean
    "zh": "chi",  # Chinese
    "ar": "ara",  # Arabic
    "hi": "hin",  # Hindi
    "nl": "dut",  # Dutch
    "pl": "pol",  # Polish
    "tr": "tur",  # Turkish
    "sv": "swe",  # Swedish
    "da": "dan",  # Danish
    "no": "nor",  # Norwegian
    "fi": "fin",  # Finnish
    "cs": "cze",  # Czech
    "hu": "hun",  # Hungarian
    "ro": "rum",  # Romanian
    "el": "gre",  # Greek
    "he": "heb",  # Hebrew
    "uk": "ukr",  # Ukrainian
}


def normalize_language_code(code: str) -> str:
    """Normalize a language code to the 3-letter ISO 639-2 form.

    Two-letter codes are converted when known; anything else is lowercased
    and returned unchanged. An empty code stays empty.

    Args:
        code: Language code (e.g., 'en', 'ENG', 'pt-br')

    Returns:
        Normalized language code (e.g., 'eng')
    """
    if not code:
        return code

    code_lower = code.lower()
    return ISO_639_1_TO_639_2.get(code_lower, code_lower)
