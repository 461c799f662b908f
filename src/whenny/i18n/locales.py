"""Locale string tables.

A ``LocaleTable`` is static data: phrase callables per relative-time bucket,
a handful of fixed words, str.format templates for smart phrasing and the
month/weekday name arrays. Tables are immutable; the registry maps locale
codes to tables and is updated by whole-entry assignment.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional, Tuple

from whenny.errors import InvalidConfigError, MissingLocaleEntryError

logger = logging.getLogger(__name__)


PhraseFn = Callable[[int], str]

BUCKETS = ("justNow", "seconds", "minutes", "hours", "days", "weeks", "months", "years")
TEMPLATES = (
    "yesterday_at",
    "today_at",
    "tomorrow_at",
    "weekday_at",
    "about",
    "before",
    "after",
    "simultaneous",
)
DURATION_UNITS = ("years", "months", "weeks", "days", "hours", "minutes", "seconds")


def counted(one: str, many: str) -> PhraseFn:
    """Phrase function choosing ``one`` for a count of 1 and ``many`` otherwise.

    Both templates receive the count as ``{n}``.
    """

    def _phrase(n: int) -> str:
        return (one if n == 1 else many).format(n=n)

    return _phrase


def fixed(text: str) -> PhraseFn:
    return lambda _n: text


def uniform(template: str) -> PhraseFn:
    """Phrase function for languages without plural forms."""
    return counted(template, template)


@dataclass(frozen=True, eq=False)
class LocaleTable:
    """Phrases and names for one language."""

    code: str
    past: Mapping[str, PhraseFn]
    future: Mapping[str, PhraseFn]
    just_now: str
    now: str
    yesterday: str
    tomorrow: str
    at: str
    templates: Mapping[str, str]
    durations: Mapping[str, PhraseFn]
    months_short: Tuple[str, ...]
    months_full: Tuple[str, ...]
    weekdays_short: Tuple[str, ...]
    weekdays_full: Tuple[str, ...]
    fallback: Optional["LocaleTable"] = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        for name, expected in (
            ("months_short", 12),
            ("months_full", 12),
            ("weekdays_short", 7),
            ("weekdays_full", 7),
        ):
            values = tuple(getattr(self, name))
            if len(values) != expected:
                raise InvalidConfigError(
                    f"Locale {self.code!r}: {name} needs {expected} entries, got {len(values)}",
                    input=self.code,
                )
            object.__setattr__(self, name, values)
        object.__setattr__(self, "past", MappingProxyType(dict(self.past)))
        object.__setattr__(self, "future", MappingProxyType(dict(self.future)))
        object.__setattr__(self, "templates", MappingProxyType(dict(self.templates)))
        object.__setattr__(self, "durations", MappingProxyType(dict(self.durations)))

    def past_phrase(self, bucket: str, count: int) -> str:
        return self._lookup("past", bucket)(count)

    def future_phrase(self, bucket: str, count: int) -> str:
        return self._lookup("future", bucket)(count)

    def duration_phrase(self, unit: str, count: int) -> str:
        return self._lookup("durations", unit)(count)

    def template(self, name: str, **values: str) -> str:
        template = self._lookup("templates", name)
        return template.format(**values)

    def _lookup(self, group: str, key: str):
        table = self
        while table is not None:
            entries = getattr(table, group)
            if key in entries:
                return entries[key]
            table = table.fallback
        raise MissingLocaleEntryError(f"{group}.{key}", locale=self.code)

    def with_fallback(self, base: "LocaleTable") -> "LocaleTable":
        """Copy of this table that resolves missing entries from ``base``."""
        if base is self:
            return self
        return replace(self, fallback=base)


ENGLISH = LocaleTable(
    code="en",
    past={
        "justNow": fixed("just now"),
        "seconds": counted("{n} second ago", "{n} seconds ago"),
        "minutes": counted("{n} minute ago", "{n} minutes ago"),
        "hours": counted("{n} hour ago", "{n} hours ago"),
        "days": counted("{n} day ago", "{n} days ago"),
        "weeks": counted("{n} week ago", "{n} weeks ago"),
        "months": counted("{n} month ago", "{n} months ago"),
        "years": counted("{n} year ago", "{n} years ago"),
    },
    future={
        "justNow": fixed("just now"),
        "seconds": counted("in {n} second", "in {n} seconds"),
        "minutes": counted("in {n} minute", "in {n} minutes"),
        "hours": counted("in {n} hour", "in {n} hours"),
        "days": counted("in {n} day", "in {n} days"),
        "weeks": counted("in {n} week", "in {n} weeks"),
        "months": counted("in {n} month", "in {n} months"),
        "years": counted("in {n} year", "in {n} years"),
    },
    just_now="just now",
    now="now",
    yesterday="yesterday",
    tomorrow="tomorrow",
    at="at",
    templates={
        "yesterday_at": "yesterday at {time}",
        "today_at": "today at {time}",
        "tomorrow_at": "tomorrow at {time}",
        "weekday_at": "{weekday} at {time}",
        "about": "about {time}",
        "before": "{time} before",
        "after": "{time} after",
        "simultaneous": "at the same time",
    },
    durations={
        "years": counted("{n} year", "{n} years"),
        "months": counted("{n} month", "{n} months"),
        "weeks": counted("{n} week", "{n} weeks"),
        "days": counted("{n} day", "{n} days"),
        "hours": counted("{n} hour", "{n} hours"),
        "minutes": counted("{n} minute", "{n} minutes"),
        "seconds": counted("{n} second", "{n} seconds"),
    },
    months_short=("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"),
    months_full=(
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
    weekdays_short=("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"),
    weekdays_full=("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"),
)


SPANISH = LocaleTable(
    code="es",
    past={
        "justNow": fixed("ahora mismo"),
        "seconds": counted("hace {n} segundo", "hace {n} segundos"),
        "minutes": counted("hace {n} minuto", "hace {n} minutos"),
        "hours": counted("hace {n} hora", "hace {n} horas"),
        "days": counted("hace {n} día", "hace {n} días"),
        "weeks": counted("hace {n} semana", "hace {n} semanas"),
        "months": counted("hace {n} mes", "hace {n} meses"),
        "years": counted("hace {n} año", "hace {n} años"),
    },
    future={
        "justNow": fixed("ahora mismo"),
        "seconds": counted("en {n} segundo", "en {n} segundos"),
        "minutes": counted("en {n} minuto", "en {n} minutos"),
        "hours": counted("en {n} hora", "en {n} horas"),
        "days": counted("en {n} día", "en {n} días"),
        "weeks": counted("en {n} semana", "en {n} semanas"),
        "months": counted("en {n} mes", "en {n} meses"),
        "years": counted("en {n} año", "en {n} años"),
    },
    just_now="ahora mismo",
    now="ahora",
    yesterday="ayer",
    tomorrow="mañana",
    at="a las",
    templates={
        "yesterday_at": "ayer a las {time}",
        "today_at": "hoy a las {time}",
        "tomorrow_at": "mañana a las {time}",
        "weekday_at": "{weekday} a las {time}",
        "about": "aproximadamente {time}",
        "before": "{time} antes",
        "after": "{time} después",
        "simultaneous": "al mismo tiempo",
    },
    durations={
        "years": counted("{n} año", "{n} años"),
        "months": counted("{n} mes", "{n} meses"),
        "weeks": counted("{n} semana", "{n} semanas"),
        "days": counted("{n} día", "{n} días"),
        "hours": counted("{n} hora", "{n} horas"),
        "minutes": counted("{n} minuto", "{n} minutos"),
        "seconds": counted("{n} segundo", "{n} segundos"),
    },
    months_short=("Ene", "Feb", "Mar", "Abr", "May", "Jun", "Jul", "Ago", "Sep", "Oct", "Nov", "Dic"),
    months_full=(
        "Enero", "Febrero", "Marzo", "Abril", "Mayo", "Junio",
        "Julio", "Agosto", "Septiembre", "Octubre", "Noviembre", "Diciembre",
    ),
    weekdays_short=("Dom", "Lun", "Mar", "Mié", "Jue", "Vie", "Sáb"),
    weekdays_full=("Domingo", "Lunes", "Martes", "Miércoles", "Jueves", "Viernes", "Sábado"),
)


FRENCH = LocaleTable(
    code="fr",
    past={
        "justNow": fixed("à l'instant"),
        "seconds": counted("il y a {n} seconde", "il y a {n} secondes"),
        "minutes": counted("il y a {n} minute", "il y a {n} minutes"),
        "hours": counted("il y a {n} heure", "il y a {n} heures"),
        "days": counted("il y a {n} jour", "il y a {n} jours"),
        "weeks": counted("il y a {n} semaine", "il y a {n} semaines"),
        "months": counted("il y a {n} mois", "il y a {n} mois"),
        "years": counted("il y a {n} an", "il y a {n} ans"),
    },
    future={
        "justNow": fixed("à l'instant"),
        "seconds": counted("dans {n} seconde", "dans {n} secondes"),
        "minutes": counted("dans {n} minute", "dans {n} minutes"),
        "hours": counted("dans {n} heure", "dans {n} heures"),
        "days": counted("dans {n} jour", "dans {n} jours"),
        "weeks": counted("dans {n} semaine", "dans {n} semaines"),
        "months": counted("dans {n} mois", "dans {n} mois"),
        "years": counted("dans {n} an", "dans {n} ans"),
    },
    just_now="à l'instant",
    now="maintenant",
    yesterday="hier",
    tomorrow="demain",
    at="à",
    templates={
        "yesterday_at": "hier à {time}",
        "today_at": "aujourd'hui à {time}",
        "tomorrow_at": "demain à {time}",
        "weekday_at": "{weekday} à {time}",
        "about": "environ {time}",
        "before": "{time} avant",
        "after": "{time} après",
        "simultaneous": "en même temps",
    },
    durations={
        "years": counted("{n} an", "{n} ans"),
        "months": counted("{n} mois", "{n} mois"),
        "weeks": counted("{n} semaine", "{n} semaines"),
        "days": counted("{n} jour", "{n} jours"),
        "hours": counted("{n} heure", "{n} heures"),
        "minutes": counted("{n} minute", "{n} minutes"),
        "seconds": counted("{n} seconde", "{n} secondes"),
    },
    months_short=("Jan", "Fév", "Mar", "Avr", "Mai", "Jun", "Jul", "Aoû", "Sep", "Oct", "Nov", "Déc"),
    months_full=(
        "Janvier", "Février", "Mars", "Avril", "Mai", "Juin",
        "Juillet", "Août", "Septembre", "Octobre", "Novembre", "Décembre",
    ),
    weekdays_short=("Dim", "Lun", "Mar", "Mer", "Jeu", "Ven", "Sam"),
    weekdays_full=("Dimanche", "Lundi", "Mardi", "Mercredi", "Jeudi", "Vendredi", "Samedi"),
)


GERMAN = LocaleTable(
    code="de",
    past={
        "justNow": fixed("gerade eben"),
        "seconds": counted("vor {n} Sekunde", "vor {n} Sekunden"),
        "minutes": counted("vor {n} Minute", "vor {n} Minuten"),
        "hours": counted("vor {n} Stunde", "vor {n} Stunden"),
        "days": counted("vor {n} Tag", "vor {n} Tagen"),
        "weeks": counted("vor {n} Woche", "vor {n} Wochen"),
        "months": counted("vor {n} Monat", "vor {n} Monaten"),
        "years": counted("vor {n} Jahr", "vor {n} Jahren"),
    },
    future={
        "justNow": fixed("gerade eben"),
        "seconds": counted("in {n} Sekunde", "in {n} Sekunden"),
        "minutes": counted("in {n} Minute", "in {n} Minuten"),
        "hours": counted("in {n} Stunde", "in {n} Stunden"),
        "days": counted("in {n} Tag", "in {n} Tagen"),
        "weeks": counted("in {n} Woche", "in {n} Wochen"),
        "months": counted("in {n} Monat", "in {n} Monaten"),
        "years": counted("in {n} Jahr", "in {n} Jahren"),
    },
    just_now="gerade eben",
    now="jetzt",
    yesterday="gestern",
    tomorrow="morgen",
    at="um",
    templates={
        "yesterday_at": "gestern um {time}",
        "today_at": "heute um {time}",
        "tomorrow_at": "morgen um {time}",
        "weekday_at": "{weekday} um {time}",
        "about": "etwa {time}",
        "before": "{time} vorher",
        "after": "{time} nachher",
        "simultaneous": "gleichzeitig",
    },
    durations={
        "years": counted("{n} Jahr", "{n} Jahre"),
        "months": counted("{n} Monat", "{n} Monate"),
        "weeks": counted("{n} Woche", "{n} Wochen"),
        "days": counted("{n} Tag", "{n} Tage"),
        "hours": counted("{n} Stunde", "{n} Stunden"),
        "minutes": counted("{n} Minute", "{n} Minuten"),
        "seconds": counted("{n} Sekunde", "{n} Sekunden"),
    },
    months_short=("Jan", "Feb", "Mär", "Apr", "Mai", "Jun", "Jul", "Aug", "Sep", "Okt", "Nov", "Dez"),
    months_full=(
        "Januar", "Februar", "März", "April", "Mai", "Juni",
        "Juli", "August", "September", "Oktober", "November", "Dezember",
    ),
    weekdays_short=("So", "Mo", "Di", "Mi", "Do", "Fr", "Sa"),
    weekdays_full=("Sonntag", "Montag", "Dienstag", "Mittwoch", "Donnerstag", "Freitag", "Samstag"),
)


JAPANESE = LocaleTable(
    code="ja",
    past={
        "justNow": fixed("たった今"),
        "seconds": uniform("{n}秒前"),
        "minutes": uniform("{n}分前"),
        "hours": uniform("{n}時間前"),
        "days": uniform("{n}日前"),
        "weeks": uniform("{n}週間前"),
        "months": uniform("{n}ヶ月前"),
        "years": uniform("{n}年前"),
    },
    future={
        "justNow": fixed("たった今"),
        "seconds": uniform("{n}秒後"),
        "minutes": uniform("{n}分後"),
        "hours": uniform("{n}時間後"),
        "days": uniform("{n}日後"),
        "weeks": uniform("{n}週間後"),
        "months": uniform("{n}ヶ月後"),
        "years": uniform("{n}年後"),
    },
    just_now="たった今",
    now="今",
    yesterday="昨日",
    tomorrow="明日",
    at="",
    templates={
        "yesterday_at": "昨日 {time}",
        "today_at": "今日 {time}",
        "tomorrow_at": "明日 {time}",
        "weekday_at": "{weekday} {time}",
        "about": "約{time}",
        "before": "{time}前",
        "after": "{time}後",
        "simultaneous": "同時",
    },
    durations={
        "years": uniform("{n}年"),
        "months": uniform("{n}ヶ月"),
        "weeks": uniform("{n}週間"),
        "days": uniform("{n}日"),
        "hours": uniform("{n}時間"),
        "minutes": uniform("{n}分"),
        "seconds": uniform("{n}秒"),
    },
    months_short=tuple(f"{month}月" for month in range(1, 13)),
    months_full=tuple(f"{month}月" for month in range(1, 13)),
    weekdays_short=("日", "月", "火", "水", "木", "金", "土"),
    weekdays_full=("日曜日", "月曜日", "火曜日", "水曜日", "木曜日", "金曜日", "土曜日"),
)

# Simplified Chinese
CHINESE = LocaleTable(
    code="zh",
    past={
        "justNow": fixed("刚刚"),
        "seconds": uniform("{n}秒前"),
        "minutes": uniform("{n}分钟前"),
        "hours": uniform("{n}小时前"),
        "days": uniform("{n}天前"),
        "weeks": uniform("{n}周前"),
        "months": uniform("{n}个月前"),
        "years": uniform("{n}年前"),
    },
    future={
        "justNow": fixed("刚刚"),
        "seconds": uniform("{n}秒后"),
        "minutes": uniform("{n}分钟后"),
        "hours": uniform("{n}小时后"),
        "days": uniform("{n}天后"),
        "weeks": uniform("{n}周后"),
        "months": uniform("{n}个月后"),
        "years": uniform("{n}年后"),
    },
    just_now="刚刚",
    now="现在",
    yesterday="昨天",
    tomorrow="明天",
    at="",
    templates={
        "yesterday_at": "昨天 {time}",
        "today_at": "今天 {time}",
        "tomorrow_at": "明天 {time}",
        "weekday_at": "{weekday} {time}",
        "about": "大约{time}",
        "before": "{time}之前",
        "after": "{time}之后",
        "simultaneous": "同时",
    },
    durations={
        "years": uniform("{n}年"),
        "months": uniform("{n}个月"),
        "weeks": uniform("{n}周"),
        "days": uniform("{n}天"),
        "hours": uniform("{n}小时"),
        "minutes": uniform("{n}分钟"),
        "seconds": uniform("{n}秒"),
    },
    months_short=tuple(f"{month}月" for month in range(1, 13)),
    months_full=(
        "一月", "二月", "三月", "四月", "五月", "六月",
        "七月", "八月", "九月", "十月", "十一月", "十二月",
    ),
    weekdays_short=("日", "一", "二", "三", "四", "五", "六"),
    weekdays_full=("星期日", "星期一", "星期二", "星期三", "星期四", "星期五", "星期六"),
)


DEFAULT_LOCALE = "en"

_REGISTRY: Dict[str, LocaleTable] = {
    "en": ENGLISH,
    "es": SPANISH,
    "fr": FRENCH,
    "de": GERMAN,
    "ja": JAPANESE,
    "zh": CHINESE,
}


def available_locales() -> list[str]:
    return sorted(_REGISTRY)


def register_locale(code: str, table: LocaleTable) -> None:
    """Register (or replace) the table used for ``code``."""
    if not isinstance(table, LocaleTable):
        raise InvalidConfigError(f"Locale {code!r} must be a LocaleTable", input=code)
    _REGISTRY[code] = table
    logger.debug("Registered locale %s", code)


def get_locale(code: str = DEFAULT_LOCALE, *, fallback: bool = False) -> LocaleTable:
    """Resolve a locale code such as ``"fr"`` or ``"en-US"``.

    Without ``fallback`` an unknown code raises ``MissingLocaleEntryError``.
    With it, unknown codes resolve to English and registered tables resolve
    their missing entries from English.
    """
    table = _REGISTRY.get(code)
    if table is None and code:
        table = _REGISTRY.get(code.replace("_", "-").split("-")[0].lower())
    if table is None:
        if not fallback:
            raise MissingLocaleEntryError("locale", locale=code)
        logger.debug("Unknown locale %r, falling back to %s", code, DEFAULT_LOCALE)
        return ENGLISH
    if fallback:
        return table.with_fallback(ENGLISH)
    return table


__all__ = [
    "BUCKETS",
    "CHINESE",
    "DEFAULT_LOCALE",
    "DURATION_UNITS",
    "ENGLISH",
    "FRENCH",
    "GERMAN",
    "JAPANESE",
    "LocaleTable",
    "PhraseFn",
    "SPANISH",
    "TEMPLATES",
    "available_locales",
    "counted",
    "fixed",
    "get_locale",
    "register_locale",
    "uniform",
]
