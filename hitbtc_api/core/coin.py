"""Currencies, trading pairs and the per-API-version coin code tables."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class Coin(Enum):
    """Currencies the client knows by name.

    The member value is only a stable name; the spelling used on the wire is
    looked up in a :class:`CoinTable`.
    """

    BTC = "BTC"
    ETH = "ETH"
    TON = "TON"
    USDT = "USDT"
    USD = "USD"
    EUR = "EUR"
    LTC = "LTC"
    XRP = "XRP"


@dataclass(frozen=True)
class UnknownCoin:
    """A currency code the client does not recognise; passed through verbatim."""

    code: str

    def __post_init__(self) -> None:
        if not self.code:
            raise ValueError("Coin code must not be empty")


CoinLike = Union[Coin, UnknownCoin]


@dataclass(frozen=True)
class CoinTable:
    """Wire spelling of every known coin for one API generation.

    ``overrides`` lists only the coins whose code differs from their name.
    """

    name: str
    overrides: Mapping[Coin, str] = field(default_factory=dict)
    _by_code: dict[str, Coin] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        by_code: dict[str, Coin] = {}
        for coin in Coin:
            code = self.overrides.get(coin, coin.value)
            if code in by_code:
                raise ValueError(
                    f"Coin table {self.name!r} maps both {by_code[code].name} and {coin.name} to {code!r}"
                )
            by_code[code] = coin
        object.__setattr__(self, "_by_code", by_code)

    def to_wire(self, coin: CoinLike) -> str:
        if isinstance(coin, UnknownCoin):
            return coin.code
        return self.overrides.get(coin, coin.value)

    def from_wire(self, code: str) -> CoinLike:
        known = self._by_code.get(code)
        if known is not None:
            return known
        return UnknownCoin(code)


V2_COIN_TABLE = CoinTable("2", {Coin.USDT: "USDT20"})
V3_COIN_TABLE = CoinTable("3")

COIN_TABLES: dict[str, CoinTable] = {
    V2_COIN_TABLE.name: V2_COIN_TABLE,
    V3_COIN_TABLE.name: V3_COIN_TABLE,
}

DEFAULT_COIN_TABLE = V2_COIN_TABLE


def coin_table_for(api_version: str) -> CoinTable:
    try:
        return COIN_TABLES[str(api_version)]
    except KeyError:
        raise ValueError(
            f"No coin table for API version {api_version!r}; known: {sorted(COIN_TABLES)}"
        ) from None


@dataclass(frozen=True)
class Symbol:
    """Directional trading pair; ``Symbol(BTC, USDT)`` and ``Symbol(USDT, BTC)`` differ.

    The wire form has no delimiter, so symbols are only ever built client-side
    and never parsed back from a string.
    """

    left: CoinLike
    right: CoinLike

    def reversed(self) -> Symbol:
        return Symbol(self.right, self.left)

    def to_wire(self, table: CoinTable = DEFAULT_COIN_TABLE) -> str:
        return f"{table.to_wire(self.left)}{table.to_wire(self.right)}"


__all__ = [
    "Coin",
    "UnknownCoin",
    "CoinLike",
    "CoinTable",
    "Symbol",
    "V2_COIN_TABLE",
    "V3_COIN_TABLE",
    "COIN_TABLES",
    "DEFAULT_COIN_TABLE",
    "coin_table_for",
]
