"""
Section Selector for the ticker aggregate endpoint

``/beta/mobile/ticker/{ticker}`` returns one large object; callers can ask
for named capability groups instead of the whole thing.
"""

from typing import Any, Dict, FrozenSet, Iterable, Optional

ALL_SECTIONS = "all"

SECTION_MAP: Dict[str, FrozenSet[str]] = {
    "basic": frozenset({"ticker", "name", "price", "change", "volume", "market_cap"}),
    "trading": frozenset({"price", "change", "volume", "high", "low", "open", "close", "vwap"}),
    "congress": frozenset({
        "congress_trading",
        "recent_congress_trades",
        "congress_sentiment",
        "congress_buys",
        "congress_sells",
    }),
    "sentiment": frozenset({
        "wsb_sentiment",
        "social_sentiment",
        "options_flow",
        "reddit_posts",
        "twitter_sentiment",
    }),
    "contracts": frozenset({
        "gov_contracts",
        "lobbying_spending",
        "contract_awards",
        "lobbying_clients",
    }),
}

SECTION_DESCRIPTIONS: Dict[str, str] = {
    "basic": "Ticker, name, price, change, volume, market cap",
    "trading": "Price action and volume (high, low, open, close, VWAP)",
    "congress": "Congressional trades, sentiment, buys and sells",
    "sentiment": "WallStreetBets, social, options flow, Reddit and Twitter",
    "contracts": "Government contracts, awards and lobbying",
    ALL_SECTIONS: "Everything the endpoint returns",
}


def select_sections(obj: Any, sections: Optional[Iterable[str]]) -> Any:
    """
    Keep only the top-level keys belonging to the requested sections

    Returns ``obj`` unchanged when no sections are given, when ``"all"`` is
    among them, when ``obj`` is not a dict, or when nothing matched.
    Unknown section names are ignored.
    """
    if not isinstance(obj, dict):
        return obj

    requested = list(sections or [])
    if not requested or ALL_SECTIONS in requested:
        return obj

    wanted = set()
    for name in requested:
        wanted |= SECTION_MAP.get(name, frozenset())

    selected = {key: value for key, value in obj.items() if key in wanted}
    return selected if selected else obj
