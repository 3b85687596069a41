import json
from typing import Optional

import config
from enums.text_entity import TextEntity


class Localizator:

    @staticmethod
    def get_text(entity: TextEntity, key: str, lang: Optional[str] = None) -> str:
        """
        Get localized text for given entity and key.

        Args:
            entity: Entity type (ADMIN, USER, COMMON)
            key: Localization key
            lang: Optional language code (e.g., "en", "vi").
                  If None, uses config.LANGUAGE (default).
                  Use this parameter in concurrent contexts (e.g., FastAPI routes)
                  to avoid global state race conditions.

        Returns:
            Localized text string

        Example:
            text = Localizator.get_text(TextEntity.USER, "cart_item_added", lang="en")
        """
        language = lang if lang is not None else config.LANGUAGE
        localization_file = f"./l10n/{language}.json"

        with open(localization_file, "r", encoding="UTF-8") as f:
            data = json.loads(f.read())
            if entity == TextEntity.ADMIN:
                return data["admin"][key]
            elif entity == TextEntity.USER:
                return data["user"][key]
            else:
                return data["common"][key]

    @staticmethod
    def get_currency_symbol(lang: Optional[str] = None):
        return Localizator.get_text(TextEntity.COMMON, f"{config.CURRENCY.value.lower()}_symbol", lang=lang)

    @staticmethod
    def format_price(amount: float, lang: Optional[str] = None) -> str:
        return f"{Localizator.get_currency_symbol(lang)}{amount:.2f}"
