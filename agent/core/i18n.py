"""Fixed UI strings for the chatbot, keyed by language code.

Anything outside ``SUPPORTED_LANGUAGES`` resolves to Hindi.
"""

from __future__ import annotations

from typing import Dict, Literal


Language = Literal["en", "gu", "mr", "hi"]

SUPPORTED_LANGUAGES = ("en", "gu", "mr", "hi")
FALLBACK_LANGUAGE = "hi"
ASSISTANT_NAME = "Pockit"

LANGUAGE_NAMES: Dict[str, str] = {
    "en": "English",
    "gu": "Gujarati",
    "mr": "Marathi",
    "hi": "Hindi",
}

STRINGS: Dict[str, Dict[str, str]] = {
    "chatbotTitle": {
        "en": "Pockit Assistant",
        "gu": "પોકિટ સહાયક",
        "mr": "पॉकिट सहाय्यक",
        "hi": "पॉकिट सहायक",
    },
    "chatbotWelcome": {
        "en": "Hi! I'm Pockit. Tell me what you spent or how your savings are going.",
        "gu": "નમસ્તે! હું પોકિટ છું. તમે શું ખર્ચ્યું અથવા તમારી બચત કેવી ચાલે છે તે જણાવો.",
        "mr": "नमस्कार! मी पॉकिट आहे. तुम्ही काय खर्च केले किंवा तुमची बचत कशी चालली आहे ते सांगा.",
        "hi": "नमस्ते! मैं पॉकिट हूँ। बताइए आपने क्या खर्च किया या आपकी बचत कैसी चल रही है।",
    },
    "chatbotPlaceholder": {
        "en": "Type your message...",
        "gu": "તમારો સંદેશ લખો...",
        "mr": "तुमचा संदेश लिहा...",
        "hi": "अपना संदेश लिखें...",
    },
    "chatbotNotUnderstood": {
        "en": "I'm sorry, I couldn't understand your request.",
        "gu": "માફ કરશો, હું તમારી વિનંતી સમજી શક્યો નથી.",
        "mr": "माफ करा, मला तुमची विनंती समजली नाही.",
        "hi": "क्षमा करें, मैं आपका अनुरोध समझ नहीं पाया।",
    },
    "chatbotError": {
        "en": "Sorry, I encountered an error. Please try again.",
        "gu": "માફ કરશો, એક ભૂલ આવી. કૃપા કરી ફરી પ્રયાસ કરો.",
        "mr": "क्षमस्व, एक त्रुटी आली. कृपया पुन्हा प्रयत्न करा.",
        "hi": "क्षमा करें, एक त्रुटि आई। कृपया पुनः प्रयास करें।",
    },
}


def resolve_language(language: str) -> str:
    code = (language or "").lower()
    return code if code in SUPPORTED_LANGUAGES else FALLBACK_LANGUAGE


def language_name(language: str) -> str:
    return LANGUAGE_NAMES[resolve_language(language)]


def t(key: str, language: str) -> str:
    return STRINGS[key][resolve_language(language)]
