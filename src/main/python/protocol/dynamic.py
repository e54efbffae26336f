# SPDX-License-Identifier: GPL-2.0-or-later
"""
Pieces shared by the Vial dynamic entries (tap dance, combo, key override, alt repeat key).
"""
from protocol.base_protocol import BaseProtocol
from protocol.constants import VIAL_PROTOCOL_DYNAMIC
from protocol.errors import ParseError


def split_settings(value):
    """ Splits "a = x; b = y" into [("a", "x"), ("b", "y")], spaces are ignored """

    out = []
    for part in value.replace(" ", "").split(";"):
        if not part:
            continue
        if "=" not in part:
            raise ParseError("each part should contain =")
        out.append(tuple(part.split("=", 1)))
    return out


def json_int(value, what):
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise ParseError("{} value should be a number".format(what))
    return value


def json_str(value, what):
    if not isinstance(value, str):
        raise ParseError("{} value should be string".format(what))
    return value


class EntryOptions:
    """ Flags packed into the options byte of an entry, plus the enabled bit """

    prefix = ""
    flags = ()
    enabled_bit = 7

    def __init__(self, data=0):
        for name, bit in self.flags:
            setattr(self, name, bool(data & (1 << bit)))
        self.enabled = bool(data & (1 << self.enabled_bit))

    def serialize(self):
        out = int(self.enabled) << self.enabled_bit
        for name, bit in self.flags:
            out |= int(getattr(self, name)) << bit
        return out

    def set_flag(self, token):
        """ Accepts "<prefix>option_X", "option_X", "X", "<prefix>enabled" or "enabled" """

        if token in (self.prefix + "enabled", "enabled"):
            self.enabled = True
            return
        for name, bit in self.flags:
            if token in (self.prefix + "option_" + name, "option_" + name, name):
                setattr(self, name, True)
                return
        raise ParseError("Unknown option {}".format(token))

    def describe_lines(self):
        lines = ["{}option_{} = {}".format(self.prefix, name, str(getattr(self, name)).lower())
                 for name, bit in self.flags]
        lines.append("{}enabled = {}".format(self.prefix, str(self.enabled).lower()))
        return lines

    def __eq__(self, other):
        return type(self) is type(other) and self.serialize() == other.serialize()

    def __repr__(self):
        return "{}<{}>".format(type(self).__name__, self.serialize())


def describe_entries(entries, count, noun, generation):
    """ Listing of entries where the trailing run of empty slots is folded into one line """

    first_empty = count
    for x in range(len(entries) - 1, -1, -1):
        if not entries[x].is_empty():
            break
        first_empty = x

    lines = [e.describe(generation) for e in entries[:first_empty]]
    if first_empty < count:
        lines.append("{} slots {} - {} are EMPTY".format(noun, first_empty, count - 1))
    return lines


class ProtocolDynamic(BaseProtocol):

    def reload_dynamic(self):
        if self.vial_protocol < VIAL_PROTOCOL_DYNAMIC:
            self.tap_dance_entries = []
            self.combo_entries = []
            self.key_override_entries = []
            self.alt_repeat_key_entries = []
            return

        self.reload_tap_dance()
        self.reload_combo()
        self.reload_key_override()
        self.reload_alt_repeat_key()
