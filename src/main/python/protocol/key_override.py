# SPDX-License-Identifier: GPL-2.0-or-later
"""
Key override entries, Vial dynamic entry op 0x05/0x06.

Key override entry format (10 bytes, little endian):
    trigger: trigger keycode (uint16)
    replacement: replacement keycode (uint16)
    layers: layer mask (uint16)
    trigger_mods: required modifiers (uint8)
    negative_mod_mask: modifiers that cancel override (uint8)
    suppressed_mods: modifiers to suppress (uint8)
    options: option flags (uint8) - bit 7 = enabled
"""
import logging
import struct

from keycodes.keycodes import name_to_id, id_to_name, name_to_bitmod, bitmod_to_name
from protocol.base_protocol import BaseProtocol
from protocol.constants import DYNAMIC_VIAL_KEY_OVERRIDE_GET, DYNAMIC_VIAL_KEY_OVERRIDE_SET
from protocol.dynamic import EntryOptions, split_settings, json_int, json_str
from protocol.errors import ParseError, CapacityError

KEY_OVERRIDE_FORMAT = "<HHHBBBB"
MAX_LAYERS = 16


class KeyOverrideOptions(EntryOptions):
    """Options for key override entries."""

    prefix = "ko_"
    flags = (
        ("activation_trigger_down", 0),
        ("activation_required_mod_down", 1),
        ("activation_negative_mod_up", 2),
        ("one_mod", 3),
        ("no_reregister_trigger", 4),
        ("no_unregister_on_other_key_down", 5),
    )
    # bit 6 reserved
    enabled_bit = 7


def parse_layers(value):
    """ "1|3" -> 0b1010 """
    layers = 0
    for layer in value.split("|"):
        if not layer.isdecimal() or int(layer) >= MAX_LAYERS:
            raise ParseError("can't parse layer {}".format(layer))
        layers |= 1 << int(layer)
    return layers


def layers_to_name(layers):
    return "|".join(str(x) for x in range(MAX_LAYERS) if layers & (1 << x))


class KeyOverrideEntry:

    def __init__(self, index, trigger=0, replacement=0, layers=0, trigger_mods=0,
                 negative_mod_mask=0, suppressed_mods=0, options=0):
        self.index = index
        self.trigger = trigger
        self.replacement = replacement
        self.layers = layers
        self.trigger_mods = trigger_mods
        self.negative_mod_mask = negative_mod_mask
        self.suppressed_mods = suppressed_mods
        self.options = KeyOverrideOptions(options)

    def is_empty(self):
        return self.trigger == 0 and not self.options.enabled

    def serialize(self):
        return struct.pack(
            KEY_OVERRIDE_FORMAT,
            self.trigger,
            self.replacement,
            self.layers,
            self.trigger_mods,
            self.negative_mod_mask,
            self.suppressed_mods,
            self.options.serialize()
        )

    @classmethod
    def from_string(cls, index, value, generation):
        """
        Parses "t=KC_A; r=KC_B; l=1|3; tm=LCTL; nmm=RCTL; sm=LALT; o=enabled|one_mod".
        Settings that are not mentioned stay zero.
        """
        ko = cls(index)
        for key, setting in split_settings(value):
            if key in ("trigger", "t"):
                ko.trigger = name_to_id(setting, generation)
            elif key in ("replacement", "r"):
                ko.replacement = name_to_id(setting, generation)
            elif key in ("layers", "l"):
                ko.layers = parse_layers(setting)
            elif key in ("trigger_mods", "tm", "m"):
                ko.trigger_mods = name_to_bitmod(setting)
            elif key in ("negative_mod_mask", "nmm", "n"):
                ko.negative_mod_mask = name_to_bitmod(setting)
            elif key in ("suppressed_mods", "sm", "s"):
                ko.suppressed_mods = name_to_bitmod(setting)
            elif key in ("options", "option", "opt", "o"):
                for flag in setting.split("|"):
                    ko.options.set_flag(flag)
            else:
                raise ParseError("Unknown setting {}".format(key))
        return ko

    @classmethod
    def from_json(cls, index, data, generation):
        if not isinstance(data, dict):
            raise ParseError("key_override element should be an object")
        ko = cls(index)
        for key, value in data.items():
            if key in ("trigger", "replacement"):
                setattr(ko, key, name_to_id(json_str(value, key), generation))
            elif key == "layers":
                ko.layers = json_int(value, key) & 0xFFFF
            elif key in ("trigger_mods", "negative_mod_mask", "suppressed_mods"):
                setattr(ko, key, json_int(value, key) & 0xFF)
            elif key == "options":
                ko.options = KeyOverrideOptions(json_int(value, key))
            else:
                raise ParseError("Unknown key_override key {}".format(key))
        return ko

    def to_json(self, generation):
        return {
            "trigger": id_to_name(self.trigger, generation),
            "replacement": id_to_name(self.replacement, generation),
            "layers": self.layers,
            "trigger_mods": self.trigger_mods,
            "negative_mod_mask": self.negative_mod_mask,
            "suppressed_mods": self.suppressed_mods,
            "options": self.options.serialize()
        }

    def describe(self, generation):
        if self.is_empty():
            return "{}) EMPTY".format(self.index)
        out = "{}) trigger = {}; replacement = {}; layers = {};".format(
            self.index, id_to_name(self.trigger, generation), id_to_name(self.replacement, generation),
            layers_to_name(self.layers))
        out += "\n\ttrigger_mods = {};".format(bitmod_to_name(self.trigger_mods))
        out += "\n\tnegative_mod_mask = {};".format(bitmod_to_name(self.negative_mod_mask))
        out += "\n\tsuppressed_mods = {};".format(bitmod_to_name(self.suppressed_mods))
        for line in self.options.describe_lines():
            out += "\n\t" + line
        return out

    def __repr__(self):
        return (
            "KeyOverride<{} trigger={} replacement={} layers=0x{:04X} trigger_mods={} "
            "negative_mod_mask={} suppressed_mods={} options={}>".format(
                self.index, self.trigger, self.replacement, self.layers, self.trigger_mods,
                self.negative_mod_mask, self.suppressed_mods, self.options
            )
        )

    def __eq__(self, other):
        return isinstance(other, KeyOverrideEntry) and self.index == other.index \
            and self.serialize() == other.serialize()


def key_overrides_from_json(data, generation):
    if not isinstance(data, list):
        raise ParseError("key_overrides should be encoded as array")
    return [KeyOverrideEntry.from_json(x, e, generation) for x, e in enumerate(data)]


def key_overrides_to_json(entries, generation):
    return [e.to_json(generation) for e in entries]


class ProtocolKeyOverride(BaseProtocol):

    key_override_entries = ()

    def reload_key_override(self):
        entries = self._retrieve_dynamic_entries(DYNAMIC_VIAL_KEY_OVERRIDE_GET, self.key_override_count,
                                                 KEY_OVERRIDE_FORMAT, "key overrides")
        self.key_override_entries = [KeyOverrideEntry(idx, *e) for idx, e in enumerate(entries)]

    def key_override_get(self, idx):
        return self.key_override_entries[idx]

    def key_override_set(self, entry):
        if entry.index >= self.key_override_count:
            raise CapacityError("key override {} out of range, keyboard has {}".format(
                entry.index, self.key_override_count))
        logging.debug("key_override_set: %r", entry)
        self._store_dynamic_entry(DYNAMIC_VIAL_KEY_OVERRIDE_SET, entry.index, entry.serialize())
        if entry.index < len(self.key_override_entries):
            self.key_override_entries[entry.index] = entry
