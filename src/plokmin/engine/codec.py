"""Compact share code for game states.

Layout (before base64url encoding, no padding):
- Byte 0: format version (currently 1)
- Byte 1: game type (0 FreeCell, 1 Klondike)
- Byte 2: variant config (Klondike draw count)
- Bytes 3-10: seed (signed 64-bit, big-endian)
- Bytes 11-14: move count (unsigned 32-bit, big-endian)
- Body: 6-bit fields, most significant bit first, zero-padded to a byte

Body fields, in order: for each tableau column its length, face-up count
and cards; one card field per free cell; then length plus cards for each
foundation, the stock and the waste. A card field is 2 suit bits followed
by 4 rank bits; 0 marks an empty free cell.
"""

import base64
import binascii
import re
import struct
from typing import Iterable, Optional

from plokmin.engine.cards import SUIT_ORDER, Card
from plokmin.engine.errors import InvalidStateError, SerializationError
from plokmin.engine.rng import validate_seed
from plokmin.engine.state import GameState, TableauColumn, check_invariants
from plokmin.engine.variants import variant_from_header

CODEC_VERSION = 1

HEADER_FORMAT = "!BBBqI"
HEADER_SIZE = struct.calcsize(HEADER_FORMAT)  # 15 bytes

FIELD_BITS = 6
FIELD_MAX = (1 << FIELD_BITS) - 1
EMPTY_CARD = 0

_BASE64URL = re.compile(r"^[A-Za-z0-9_-]*$")


def card_to_field(card: Optional[Card]) -> int:
    """6-bit field for a card; 0 for an empty slot."""
    if card is None:
        return EMPTY_CARD
    return (card.suit.code << 4) | card.rank


def field_to_card(value: int) -> Optional[Card]:
    if value == EMPTY_CARD:
        return None
    try:
        return Card(suit=SUIT_ORDER[value >> 4], rank=value & 0x0F)
    except ValueError as e:
        raise SerializationError(f"Invalid card field {value}") from e


class BitWriter:
    """Accumulates fixed-width fields, most significant bit first."""

    def __init__(self) -> None:
        self._value = 0
        self._bits = 0

    def write(self, value: int, width: int = FIELD_BITS) -> None:
        if not 0 <= value < (1 << width):
            raise SerializationError(f"Value {value} does not fit in {width} bits")
        self._value = (self._value << width) | value
        self._bits += width

    def write_cards(self, cards: Iterable[Card]) -> None:
        cards = tuple(cards)
        self.write(len(cards))
        for card in cards:
            self.write(card_to_field(card))

    def to_bytes(self) -> bytes:
        padding = -self._bits % 8
        total = self._bits + padding
        return (self._value << padding).to_bytes(total // 8, "big")


class BitReader:
    """Reads fixed-width fields written by BitWriter."""

    def __init__(self, data: bytes) -> None:
        self._value = int.from_bytes(data, "big")
        self._remaining = len(data) * 8

    def read(self, width: int = FIELD_BITS) -> int:
        if width > self._remaining:
            raise SerializationError("Share code is truncated")
        self._remaining -= width
        return (self._value >> self._remaining) & ((1 << width) - 1)

    def read_card(self) -> Card:
        card = field_to_card(self.read())
        if card is None:
            raise SerializationError("Unexpected empty card field")
        return card

    def read_cards(self) -> tuple[Card, ...]:
        count = self.read()
        return tuple(self.read_card() for _ in range(count))

    def finish(self) -> None:
        """Only zero padding (less than one byte) may remain."""
        if self._remaining >= 8:
            raise SerializationError("Trailing data after share code body")
        if self._value & ((1 << self._remaining) - 1):
            raise SerializationError("Non-zero padding bits")


def _encode_body(state: GameState) -> bytes:
    writer = BitWriter()
    for column in state.tableau:
        writer.write(len(column.cards))
        writer.write(column.face_up_count)
        for card in column.cards:
            writer.write(card_to_field(card))
    for cell in state.free_cells:
        writer.write(card_to_field(cell))
    for pile in state.foundations:
        writer.write_cards(pile)
    writer.write_cards(state.stock)
    writer.write_cards(state.waste)
    return writer.to_bytes()


def encode_state(state: GameState) -> str:
    """Encode a state as a URL-safe share code."""
    try:
        header = struct.pack(
            HEADER_FORMAT,
            CODEC_VERSION,
            state.variant.game_type,
            state.variant.config_byte,
            state.seed,
            state.move_count,
        )
    except struct.error as e:
        raise SerializationError(f"Cannot encode state header: {e}") from e
    raw = header + _encode_body(state)
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _b64decode(code: str) -> bytes:
    if not isinstance(code, str):
        raise SerializationError(f"Share code must be a string, got {type(code).__name__}")
    code = code.strip()
    if not _BASE64URL.match(code):
        raise SerializationError("Share code contains invalid characters")
    try:
        return base64.urlsafe_b64decode(code + "=" * (-len(code) % 4))
    except (binascii.Error, ValueError) as e:
        raise SerializationError(f"Invalid base64url share code: {e}") from e


def decode_state(code: str) -> GameState:
    """Decode a share code produced by encode_state.

    Raises:
        SerializationError: if the code is malformed or describes an
            impossible state
    """
    raw = _b64decode(code)
    if len(raw) < HEADER_SIZE:
        raise SerializationError("Share code is too short")

    version, game_type, config, seed, move_count = struct.unpack(HEADER_FORMAT, raw[:HEADER_SIZE])
    if version != CODEC_VERSION:
        raise SerializationError(f"Unsupported share code version {version}")
    try:
        variant = variant_from_header(game_type, config)
        validate_seed(seed)
    except ValueError as e:
        raise SerializationError(str(e)) from e

    reader = BitReader(raw[HEADER_SIZE:])
    columns = []
    for _ in range(variant.column_count):
        length = reader.read()
        face_up = reader.read()
        cards = tuple(reader.read_card() for _ in range(length))
        columns.append(TableauColumn(cards=cards, face_up_count=face_up))
    free_cells = tuple(field_to_card(reader.read()) for _ in range(variant.free_cell_count))
    foundations = tuple(reader.read_cards() for _ in range(variant.foundation_count))
    stock = reader.read_cards()
    waste = reader.read_cards()
    reader.finish()

    state = GameState(
        variant=variant,
        tableau=tuple(columns),
        free_cells=free_cells,
        foundations=foundations,
        stock=stock,
        waste=waste,
        seed=seed,
        move_count=move_count,
    )
    try:
        check_invariants(state)
    except InvalidStateError as e:
        raise SerializationError(f"Share code describes an invalid state: {e}") from e
    return state
