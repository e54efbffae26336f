# SPDX-License-Identifier: GPL-2.0-or-later
"""
Tap dance entries, Vial dynamic entry op 0x01/0x02.

Tap dance entry format (10 bytes, little endian):
    on_tap: keycode for single tap
    on_hold: keycode for hold
    on_double_tap: keycode for double tap
    on_tap_hold: keycode for tap then hold
    tapping_term: in ms
"""
import logging
import struct

from keycodes.keycodes import name_to_id, id_to_name
from protocol.base_protocol import BaseProtocol
from protocol.constants import DYNAMIC_VIAL_TAP_DANCE_GET, DYNAMIC_VIAL_TAP_DANCE_SET
from protocol.dynamic import json_int, json_str
from protocol.errors import ParseError, CapacityError

TAP_DANCE_FORMAT = "<HHHHH"


class TapDanceEntry:

    actions = (
        ("tap", "On tap"),
        ("hold", "On hold"),
        ("double_tap", "On double tap"),
        ("tap_hold", "On tap + hold"),
    )

    def __init__(self, index, tap=0, hold=0, double_tap=0, tap_hold=0, tapping_term=0):
        self.index = index
        self.tap = tap
        self.hold = hold
        self.double_tap = double_tap
        self.tap_hold = tap_hold
        self.tapping_term = tapping_term

    def keys(self):
        return [self.tap, self.hold, self.double_tap, self.tap_hold]

    def is_empty(self):
        return not any(self.keys())

    def serialize(self):
        return struct.pack(TAP_DANCE_FORMAT, *self.keys(), self.tapping_term)

    @classmethod
    def from_string(cls, index, value, generation):
        """ Parses "KC_A + KC_B ~ 200", keys in tap, hold, double tap, tap + hold order """
        if not value.strip():
            return cls(index)
        if "~" not in value:
            raise ParseError("tapping term in ms should be passed after ~")
        keys, term = value.split("~", 1)
        term = term.replace(" ", "")
        if not term.isdecimal() or int(term) > 0xFFFF:
            raise ParseError("can't parse tapping term {}".format(term))
        keys = keys.split("+")
        if len(keys) > 4:
            raise ParseError("tap dance can have at most 4 keys")
        codes = [name_to_id(k, generation) for k in keys]
        return cls(index, *codes, tapping_term=int(term))

    @classmethod
    def from_json(cls, index, data, generation):
        """ [tap, hold, double_tap, tap_hold, tapping_term], a shorter array leaves the rest empty """
        if not isinstance(data, list):
            raise ParseError("TapDances should be encoded into array")
        if len(data) > 5:
            raise ParseError("TapDance array should be strictly 5 elements long")
        codes = [name_to_id(json_str(v, "TapDance key"), generation) for v in data[:4]]
        codes += [0] * (4 - len(codes))
        term = json_int(data[4], "tapping term") if len(data) == 5 else 0
        return cls(index, *codes, tapping_term=term)

    def to_json(self, generation):
        return [id_to_name(k, generation) for k in self.keys()] + [self.tapping_term]

    def describe(self, generation):
        if self.is_empty():
            return "{}) EMPTY".format(self.index)
        out = "{}) ".format(self.index)
        for attr, title in self.actions:
            code = getattr(self, attr)
            if code != 0:
                out += "{}: {}, ".format(title, id_to_name(code, generation))
        return out + "Tapping term (ms) = {}".format(self.tapping_term)

    def __repr__(self):
        return "TapDance<{} {} term={}>".format(self.index, self.keys(), self.tapping_term)

    def __eq__(self, other):
        return isinstance(other, TapDanceEntry) and self.index == other.index \
            and self.serialize() == other.serialize()


def tap_dances_from_json(data, generation):
    if not isinstance(data, list):
        raise ParseError("TapDances should be encoded as array")
    return [TapDanceEntry.from_json(x, e, generation) for x, e in enumerate(data)]


def tap_dances_to_json(entries, generation):
    return [e.to_json(generation) for e in entries]


class ProtocolTapDance(BaseProtocol):

    tap_dance_entries = ()

    def reload_tap_dance(self):
        entries = self._retrieve_dynamic_entries(DYNAMIC_VIAL_TAP_DANCE_GET, self.tap_dance_count,
                                                 TAP_DANCE_FORMAT, "tap dance")
        self.tap_dance_entries = [TapDanceEntry(idx, *e) for idx, e in enumerate(entries)]

    def tap_dance_get(self, idx):
        return self.tap_dance_entries[idx]

    def tap_dance_set(self, entry):
        if entry.index >= self.tap_dance_count:
            raise CapacityError("tap dance {} out of range, keyboard has {}".format(
                entry.index, self.tap_dance_count))
        logging.debug("tap_dance_set: %r", entry)
        self._store_dynamic_entry(DYNAMIC_VIAL_TAP_DANCE_SET, entry.index, entry.serialize())
        if entry.index < len(self.tap_dance_entries):
            self.tap_dance_entries[entry.index] = entry
