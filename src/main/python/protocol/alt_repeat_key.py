# SPDX-License-Identifier: GPL-2.0-or-later
"""
Alt repeat key entries, Vial dynamic entry op 0x07/0x08.

Entry format (6 bytes, little endian):
    keycode: last pressed keycode to match (uint16)
    alt_keycode: keycode sent by QK_ALT_REPEAT_KEY (uint16)
    allowed_mods: modifiers that may be held (uint8)
    options: option flags (uint8) - bit 3 = enabled
"""
import logging
import struct

from keycodes.keycodes import name_to_id, id_to_name, name_to_bitmod, bitmod_to_name
from protocol.base_protocol import BaseProtocol
from protocol.constants import DYNAMIC_VIAL_ALT_REPEAT_KEY_GET, DYNAMIC_VIAL_ALT_REPEAT_KEY_SET
from protocol.dynamic import EntryOptions, split_settings, json_int, json_str
from protocol.errors import ParseError, CapacityError

ALT_REPEAT_KEY_FORMAT = "<HHBB"


class AltRepeatKeyOptions(EntryOptions):

    prefix = "arep_"
    flags = (
        ("default_to_this_alt_key", 0),
        ("bidirectional", 1),
        ("ignore_mod_handedness", 2),
    )
    enabled_bit = 3


class AltRepeatKeyEntry:

    def __init__(self, index, keycode=0, alt_keycode=0, allowed_mods=0, options=0):
        self.index = index
        self.keycode = keycode
        self.alt_keycode = alt_keycode
        self.allowed_mods = allowed_mods
        self.options = AltRepeatKeyOptions(options)

    def is_empty(self):
        return self.keycode == 0 and not self.options.enabled

    def serialize(self):
        return struct.pack(ALT_REPEAT_KEY_FORMAT, self.keycode, self.alt_keycode,
                           self.allowed_mods, self.options.serialize())

    @classmethod
    def from_string(cls, index, value, generation):
        """ Parses "k=KC_A; a=KC_B; m=LCTL; o=enabled|bidirectional" """
        ar = cls(index)
        for key, setting in split_settings(value):
            if key in ("keycode", "k"):
                ar.keycode = name_to_id(setting, generation)
            elif key in ("alt_keycode", "a"):
                ar.alt_keycode = name_to_id(setting, generation)
            elif key in ("allowed_mods", "m"):
                ar.allowed_mods = name_to_bitmod(setting)
            elif key in ("options", "option", "opt", "o"):
                for flag in setting.split("|"):
                    ar.options.set_flag(flag)
            else:
                raise ParseError("Unknown setting {}".format(key))
        return ar

    @classmethod
    def from_json(cls, index, data, generation):
        if not isinstance(data, dict):
            raise ParseError("alt_repeat element should be an object")
        ar = cls(index)
        for key, value in data.items():
            if key in ("keycode", "alt_keycode"):
                setattr(ar, key, name_to_id(json_str(value, key), generation))
            elif key == "allowed_mods":
                ar.allowed_mods = json_int(value, key) & 0xFF
            elif key == "options":
                ar.options = AltRepeatKeyOptions(json_int(value, key))
            else:
                raise ParseError("Unknown alt_repeat key {}".format(key))
        return ar

    def to_json(self, generation):
        return {
            "keycode": id_to_name(self.keycode, generation),
            "alt_keycode": id_to_name(self.alt_keycode, generation),
            "allowed_mods": self.allowed_mods,
            "options": self.options.serialize(),
        }

    def describe(self, generation):
        if self.is_empty():
            return "{}) EMPTY".format(self.index)
        out = "{}) keycode = {}; alt_keycode = {}; ".format(
            self.index, id_to_name(self.keycode, generation), id_to_name(self.alt_keycode, generation))
        out += "\n\tallowed_mods = {};".format(bitmod_to_name(self.allowed_mods))
        for line in self.options.describe_lines():
            out += "\n\t" + line
        return out

    def __repr__(self):
        return "AltRepeatKey<{} keycode={} alt_keycode={} allowed_mods={} options={}>".format(
            self.index, self.keycode, self.alt_keycode, self.allowed_mods, self.options)

    def __eq__(self, other):
        return isinstance(other, AltRepeatKeyEntry) and self.index == other.index \
            and self.serialize() == other.serialize()


def alt_repeat_keys_from_json(data, generation):
    if not isinstance(data, list):
        raise ParseError("alt_repeats should be an array")
    return [AltRepeatKeyEntry.from_json(x, e, generation) for x, e in enumerate(data)]


def alt_repeat_keys_to_json(entries, generation):
    return [e.to_json(generation) for e in entries]


class ProtocolAltRepeatKey(BaseProtocol):

    alt_repeat_key_entries = ()

    def reload_alt_repeat_key(self):
        entries = self._retrieve_dynamic_entries(DYNAMIC_VIAL_ALT_REPEAT_KEY_GET, self.alt_repeat_key_count,
                                                 ALT_REPEAT_KEY_FORMAT, "alt repeat keys")
        self.alt_repeat_key_entries = [AltRepeatKeyEntry(idx, *e) for idx, e in enumerate(entries)]

    def alt_repeat_key_get(self, idx):
        return self.alt_repeat_key_entries[idx]

    def alt_repeat_key_set(self, entry):
        if entry.index >= self.alt_repeat_key_count:
            raise CapacityError("alt repeat key {} out of range, keyboard has {}".format(
                entry.index, self.alt_repeat_key_count))
        logging.debug("alt_repeat_key_set: %r", entry)
        self._store_dynamic_entry(DYNAMIC_VIAL_ALT_REPEAT_KEY_SET, entry.index, entry.serialize())
        if entry.index < len(self.alt_repeat_key_entries):
            self.alt_repeat_key_entries[entry.index] = entry
