# SPDX-License-Identifier: GPL-2.0-or-later
"""
Combo entries, Vial dynamic entry op 0x03/0x04.

Combo entry format (10 bytes, little endian):
    input[4]: up to 4 trigger keycodes, unused ones are KC_NO
    output: keycode sent when all triggers are held
"""
import logging
import struct

from keycodes.keycodes import name_to_id, id_to_name
from protocol.base_protocol import BaseProtocol
from protocol.constants import DYNAMIC_VIAL_COMBO_GET, DYNAMIC_VIAL_COMBO_SET
from protocol.dynamic import json_str
from protocol.errors import ParseError, CapacityError

COMBO_KEYS = 4
COMBO_FORMAT = "<HHHHH"


class ComboEntry:

    def __init__(self, index, keys=None, output=0):
        self.index = index
        self.keys = list(keys or [])
        self.keys += [0] * (COMBO_KEYS - len(self.keys))
        self.output = output

    def is_empty(self):
        return self.output == 0 or self.keys[0] == 0

    def serialize(self):
        return struct.pack(COMBO_FORMAT, *self.keys, self.output)

    @classmethod
    def from_string(cls, index, value, generation):
        """ Parses "KC_A + KC_B = KC_ESC" """
        if not value.strip():
            return cls(index)
        if "=" not in value:
            raise ParseError("resulting action should be declared after =")
        keys, output = value.split("=", 1)
        keys = keys.split("+")
        if len(keys) > COMBO_KEYS:
            raise ParseError("combo can have at most {} keys".format(COMBO_KEYS))
        return cls(index, [name_to_id(k, generation) for k in keys], name_to_id(output, generation))

    @classmethod
    def from_json(cls, index, data, generation):
        if not isinstance(data, list):
            raise ParseError("Combo should be encoded into array")
        if len(data) > COMBO_KEYS + 1:
            raise ParseError("combo array should be strictly 5 elements long")
        codes = [name_to_id(json_str(v, "combo"), generation) for v in data]
        codes += [0] * (COMBO_KEYS + 1 - len(codes))
        return cls(index, codes[:COMBO_KEYS], codes[COMBO_KEYS])

    def to_json(self, generation):
        return [id_to_name(code, generation) for code in self.keys + [self.output]]

    def describe(self, generation):
        if self.is_empty():
            return "{}) EMPTY".format(self.index)
        keys = " + ".join(id_to_name(k, generation) for k in self.keys if k != 0)
        return "{}) {} = {}".format(self.index, keys, id_to_name(self.output, generation))

    def __repr__(self):
        return "Combo<{} keys={} output={}>".format(self.index, self.keys, self.output)

    def __eq__(self, other):
        return isinstance(other, ComboEntry) and self.index == other.index \
            and self.serialize() == other.serialize()


def combos_from_json(data, generation):
    if not isinstance(data, list):
        raise ParseError("combos should be encoded as array")
    return [ComboEntry.from_json(x, e, generation) for x, e in enumerate(data)]


def combos_to_json(entries, generation):
    return [e.to_json(generation) for e in entries]


class ProtocolCombo(BaseProtocol):

    combo_entries = ()

    def reload_combo(self):
        entries = self._retrieve_dynamic_entries(DYNAMIC_VIAL_COMBO_GET, self.combo_count, COMBO_FORMAT, "combos")
        self.combo_entries = [ComboEntry(idx, e[:COMBO_KEYS], e[COMBO_KEYS]) for idx, e in enumerate(entries)]

    def combo_get(self, idx):
        return self.combo_entries[idx]

    def combo_set(self, entry):
        if entry.index >= self.combo_count:
            raise CapacityError("combo {} out of range, keyboard has {}".format(entry.index, self.combo_count))
        logging.debug("combo_set: %r", entry)
        self._store_dynamic_entry(DYNAMIC_VIAL_COMBO_SET, entry.index, entry.serialize())
        if entry.index < len(self.combo_entries):
            self.combo_entries[entry.index] = entry
