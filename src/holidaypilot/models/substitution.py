"""
HolidayPilot Substitution Policy

Per-jurisdiction configuration of weekend substitution.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from ..exceptions import InvalidRuleError
from .enums import ShiftStrategy, Weekday

DEFAULT_NAME_TEMPLATES: Mapping[str, str] = MappingProxyType({
    "en": "{name} (observed)",
    "fr": "{name} (observé)",
})


@dataclass(frozen=True)
class SubstitutionPolicy:
    """
    How observed holidays falling on non-working days are compensated.

    Attributes:
        triggers: Weekdays that cause a substitute to be added
        strategy: How the substitute date is derived
        avoid_collisions: Advance one day at a time past dates already
            holding a holiday
        key_format: Key of the substitute, formatted with {key}
        name_templates: Locale -> template formatted with {name}
    """
    triggers: frozenset[Weekday] = field(
        default_factory=lambda: frozenset({Weekday.SUNDAY})
    )
    strategy: ShiftStrategy = ShiftStrategy.NEXT_NON_TRIGGER
    avoid_collisions: bool = True
    key_format: str = "{key}Observed"
    name_templates: Mapping[str, str] = field(
        default_factory=lambda: dict(DEFAULT_NAME_TEMPLATES)
    )

    def __post_init__(self) -> None:
        triggers = frozenset(Weekday.parse(d) for d in self.triggers)
        if not triggers:
            raise InvalidRuleError(message="Substitution policy requires at least one trigger day")
        if len(triggers) == 7:
            raise InvalidRuleError(message="Substitution policy cannot trigger on every weekday")
        object.__setattr__(self, "triggers", triggers)
        object.__setattr__(self, "strategy", ShiftStrategy(self.strategy))
        if "{key}" not in self.key_format:
            raise InvalidRuleError(
                message="Substitute key format must contain {key}",
                details={"key_format": self.key_format},
            )
        try:
            self.key_format.format(key="x")
        except (KeyError, IndexError, ValueError) as e:
            raise InvalidRuleError(
                message=f"Substitute key format is malformed: {e!r}",
                details={"key_format": self.key_format},
            ) from e
        for locale, template in self.name_templates.items():
            if "{name}" not in template:
                raise InvalidRuleError(
                    message=f"Substitute name template for '{locale}' must contain {{name}}",
                    details={"locale": locale, "template": template},
                )
            try:
                template.format(name="x")
            except (KeyError, IndexError, ValueError) as e:
                raise InvalidRuleError(
                    message=f"Substitute name template for '{locale}' is malformed: {e!r}",
                    details={"locale": locale, "template": template},
                ) from e
        object.__setattr__(self, "name_templates", MappingProxyType(dict(self.name_templates)))

    @classmethod
    def on(cls, *days: int | str, **kwargs: Any) -> SubstitutionPolicy:
        """Shorthand: SubstitutionPolicy.on("saturday", "sunday")."""
        return cls(triggers=frozenset(Weekday.parse(d) for d in days), **kwargs)

    def is_trigger(self, weekday: int) -> bool:
        return weekday in self.triggers

    def substitute_key(self, key: str) -> str:
        return self.key_format.format(key=key)

    def substitute_names(self, names: Mapping[str, str]) -> dict[str, str]:
        """
        Names for a substitute, one per locale of the original.

        A locale without its own template uses its language's template,
        then the English one.
        """
        result: dict[str, str] = {}
        fallback = self.name_templates.get("en", "{name}")
        for locale, name in names.items():
            template = (
                self.name_templates.get(locale)
                or self.name_templates.get(locale.split("_")[0])
                or fallback
            )
            result[locale] = template.format(name=name)
        return result

    def to_dict(self) -> dict[str, Any]:
        return {
            "triggers": sorted(d.name.lower() for d in self.triggers),
            "strategy": self.strategy.value,
            "avoid_collisions": self.avoid_collisions,
            "key_format": self.key_format,
            "name_templates": dict(self.name_templates),
        }


def weekday_set(days: Iterable[int | str]) -> frozenset[Weekday]:
    return frozenset(Weekday.parse(d) for d in days)
