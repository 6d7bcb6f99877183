"""
Greek / English UI strings.

Greek is the default language; the toggle flips between the two.

Usage
-----
    lang = DEFAULT_LANGUAGE
    lang = toggle(lang)
    print(translate("contact.sending", lang))
"""
from __future__ import annotations

from typing import Dict

EL = "el"
EN = "en"
LANGUAGES = (EL, EN)
DEFAULT_LANGUAGE = EL

_STRINGS: Dict[str, Dict[str, str]] = {
    "map.title": {
        EL: "IQ TRAVEL — {count} προορισμοί",
        EN: "IQ TRAVEL — {count} destinations",
    },
    "map.toggle": {
        EL: "EN",
        EN: "EL",
    },
    "contact.sending": {
        EL: "Αποστολή...",
        EN: "Sending...",
    },
    "contact.not_configured": {
        EL: "Η φόρμα δεν έχει συνδεθεί ακόμα. Δοκιμάστε αργότερα.",
        EN: "Form not yet connected. Please try again later.",
    },
    "contact.error": {
        EL: "Κάτι πήγε στραβά. Παρακαλώ δοκιμάστε ξανά.",
        EN: "Something went wrong. Please try again.",
    },
    "contact.success": {
        EL: "Το μήνυμά σας εστάλη επιτυχώς!",
        EN: "Your message was sent successfully!",
    },
    "contact.missing_fields": {
        EL: "Συμπληρώστε όλα τα υποχρεωτικά πεδία.",
        EN: "Please fill in all required fields.",
    },
    "contact.invalid_email": {
        EL: "Μη έγκυρη διεύθυνση email.",
        EN: "Invalid email address.",
    },
}


def toggle(lang: str) -> str:
    return EN if lang == EL else EL


def translate(key: str, lang: str = DEFAULT_LANGUAGE, **fmt) -> str:
    """Look up *key* in *lang*.

    Raises KeyError for an unknown key or language.
    """
    if lang not in LANGUAGES:
        raise KeyError(f"Unsupported language '{lang}'")
    text = _STRINGS[key][lang]
    return text.format(**fmt) if fmt else text
