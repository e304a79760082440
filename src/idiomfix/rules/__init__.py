from idiomfix.core.matching import Idiom
from idiomfix.rules.no_indexof_equality import IDIOM as NO_INDEXOF_EQUALITY
from idiomfix.rules.prefer_array_at import IDIOM as PREFER_ARRAY_AT
from idiomfix.rules.prefer_array_fill import IDIOM as PREFER_ARRAY_FILL
from idiomfix.rules.prefer_array_from_map import IDIOM as PREFER_ARRAY_FROM_MAP
from idiomfix.rules.prefer_array_some import IDIOM as PREFER_ARRAY_SOME
from idiomfix.rules.prefer_array_to_reversed import IDIOM as PREFER_ARRAY_TO_REVERSED
from idiomfix.rules.prefer_array_to_sorted import IDIOM as PREFER_ARRAY_TO_SORTED
from idiomfix.rules.prefer_array_to_spliced import IDIOM as PREFER_ARRAY_TO_SPLICED
from idiomfix.rules.prefer_date_now import IDIOM as PREFER_DATE_NOW
from idiomfix.rules.prefer_exponentiation_operator import IDIOM as PREFER_EXPONENTIATION_OPERATOR
from idiomfix.rules.prefer_includes import IDIOM as PREFER_INCLUDES
from idiomfix.rules.prefer_inline_equality import IDIOM as PREFER_INLINE_EQUALITY
from idiomfix.rules.prefer_nullish_coalescing import IDIOM as PREFER_NULLISH_COALESCING
from idiomfix.rules.prefer_object_has_own import IDIOM as PREFER_OBJECT_HAS_OWN
from idiomfix.rules.prefer_regex_test import IDIOM as PREFER_REGEX_TEST
from idiomfix.rules.prefer_spread_syntax import IDIOM as PREFER_SPREAD_SYNTAX
from idiomfix.rules.prefer_static_regex import IDIOM as PREFER_STATIC_REGEX
from idiomfix.rules.prefer_timer_args import IDIOM as PREFER_TIMER_ARGS
from idiomfix.rules.prefer_url_canparse import IDIOM as PREFER_URL_CANPARSE

# Registration order is the order in which idioms fire on a node.
ALL_IDIOMS: tuple[Idiom, ...] = (
    PREFER_ARRAY_AT,
    PREFER_ARRAY_FILL,
    PREFER_ARRAY_FROM_MAP,
    PREFER_INCLUDES,
    PREFER_ARRAY_TO_REVERSED,
    PREFER_ARRAY_TO_SORTED,
    PREFER_ARRAY_TO_SPLICED,
    PREFER_EXPONENTIATION_OPERATOR,
    PREFER_NULLISH_COALESCING,
    PREFER_OBJECT_HAS_OWN,
    PREFER_SPREAD_SYNTAX,
    PREFER_URL_CANPARSE,
    NO_INDEXOF_EQUALITY,
    PREFER_TIMER_ARGS,
    PREFER_DATE_NOW,
    PREFER_REGEX_TEST,
    PREFER_ARRAY_SOME,
    PREFER_INLINE_EQUALITY,
    PREFER_STATIC_REGEX,
)

_BY_ID = {idiom.id: idiom for idiom in ALL_IDIOMS}


def get_idiom(idiom_id: str) -> Idiom:
    try:
        return _BY_ID[idiom_id]
    except KeyError:
        raise KeyError(f"Unknown rule: {idiom_id}") from None


__all__ = [
    "ALL_IDIOMS",
    "NO_INDEXOF_EQUALITY",
    "PREFER_ARRAY_AT",
    "PREFER_ARRAY_FILL",
    "PREFER_ARRAY_FROM_MAP",
    "PREFER_ARRAY_SOME",
    "PREFER_ARRAY_TO_REVERSED",
    "PREFER_ARRAY_TO_SORTED",
    "PREFER_ARRAY_TO_SPLICED",
    "PREFER_DATE_NOW",
    "PREFER_EXPONENTIATION_OPERATOR",
    "PREFER_INCLUDES",
    "PREFER_INLINE_EQUALITY",
    "PREFER_NULLISH_COALESCING",
    "PREFER_OBJECT_HAS_OWN",
    "PREFER_REGEX_TEST",
    "PREFER_SPREAD_SYNTAX",
    "PREFER_STATIC_REGEX",
    "PREFER_TIMER_ARGS",
    "PREFER_URL_CANPARSE",
    "get_idiom",
]
