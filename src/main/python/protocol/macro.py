# SPDX-License-Identifier: GPL-2.0-or-later
"""
Macro buffer codec.

The firmware stores all macros in one buffer, each terminated by 0x00. Inside a
macro, plain bytes are text to be typed and SS_QMK_PREFIX introduces a command:

    prefix TAP|DOWN|UP kc           keycode < 256
    prefix DELAY d1 d2              ms = (d2 - 1) * 255 + (d1 - 1)
    prefix EXT_TAP|DOWN|UP lo hi    keycode >= 256, low byte first

Zero can't appear inside a macro, so an extended keycode whose low byte is 0
is sent as 0xFF00 | (kc >> 8) instead.
"""
import logging
import struct
from collections import namedtuple

from keycodes.keycodes import name_to_id, id_to_name
from protocol.base_protocol import BaseProtocol
from protocol.constants import CMD_VIA_MACRO_GET_BUFFER, CMD_VIA_MACRO_SET_BUFFER, BUFFER_FETCH_CHUNK
from protocol.errors import ParseError, CapacityError, StateError
from unlocker import Unlocker

SS_QMK_PREFIX = 1
SS_TAP_CODE = 1
SS_DOWN_CODE = 2
SS_UP_CODE = 3
SS_DELAY_CODE = 4
VIAL_MACRO_EXT_TAP = 5
VIAL_MACRO_EXT_DOWN = 6
VIAL_MACRO_EXT_UP = 7

MAX_DELAY = 254 * 255 + 254


class KeyStep:

    code = None
    ext_code = None
    action = None

    def serialize(self):
        kc = self.keycode
        if kc < 256:
            return bytes([SS_QMK_PREFIX, self.code, kc])
        if kc % 256 == 0:
            kc = 0xFF00 | (kc >> 8)
        return bytes([SS_QMK_PREFIX, self.ext_code]) + struct.pack("<H", kc)

    def describe(self, generation):
        return "{}({})".format(type(self).__name__, id_to_name(self.keycode, generation))

    def to_json(self, generation):
        return [self.action, id_to_name(self.keycode, generation)]


class Tap(KeyStep, namedtuple("Tap", ["keycode"])):
    code, ext_code, action = SS_TAP_CODE, VIAL_MACRO_EXT_TAP, "tap"


class Down(KeyStep, namedtuple("Down", ["keycode"])):
    code, ext_code, action = SS_DOWN_CODE, VIAL_MACRO_EXT_DOWN, "down"


class Up(KeyStep, namedtuple("Up", ["keycode"])):
    code, ext_code, action = SS_UP_CODE, VIAL_MACRO_EXT_UP, "up"


class Delay(namedtuple("Delay", ["ms"])):

    def serialize(self):
        if not 0 <= self.ms <= MAX_DELAY:
            raise ParseError("delay {} ms is out of range, max is {}".format(self.ms, MAX_DELAY))
        return bytes([SS_QMK_PREFIX, SS_DELAY_CODE, self.ms % 255 + 1, self.ms // 255 + 1])

    def describe(self, generation):
        return "Delay({})".format(self.ms)

    def to_json(self, generation):
        return ["delay", self.ms]


class Text(namedtuple("Text", ["text"])):

    def serialize(self):
        return self.text.encode("utf-8")

    def describe(self, generation):
        return "Text({})".format(self.text)

    def to_json(self, generation):
        return ["text", self.text]


KEY_STEPS = {cls.__name__: cls for cls in (Tap, Down, Up)}
KEY_STEPS_BY_CODE = {}
for _cls in (Tap, Down, Up):
    KEY_STEPS_BY_CODE[_cls.code] = _cls
    KEY_STEPS_BY_CODE[_cls.ext_code] = _cls
KEY_STEPS_BY_ACTION = {cls.action: cls for cls in (Tap, Down, Up)}


# decoder states
Start = namedtuple("Start", [])()
InsideText = namedtuple("InsideText", ["start"])
ExpectCommand = namedtuple("ExpectCommand", [])()
HaveCommand = namedtuple("HaveCommand", ["cmd"])
HaveCommandArg1 = namedtuple("HaveCommandArg1", ["cmd", "arg1"])

# emitted when a run of text ends, decoded by the caller which owns the buffer
TextSpan = namedtuple("TextSpan", ["start", "end"])

TWO_ARG_COMMANDS = (SS_DELAY_CODE, VIAL_MACRO_EXT_TAP, VIAL_MACRO_EXT_DOWN, VIAL_MACRO_EXT_UP)


def step(state, index, byte):
    """ Feeds one byte of a macro to the decoder, returns (next state, emitted step or None) """

    if state is Start:
        if byte == SS_QMK_PREFIX:
            return ExpectCommand, None
        return InsideText(index), None

    if isinstance(state, InsideText):
        if byte == SS_QMK_PREFIX:
            return ExpectCommand, TextSpan(state.start, index)
        return state, None

    if state is ExpectCommand:
        return HaveCommand(byte), None

    if isinstance(state, HaveCommand):
        if state.cmd in TWO_ARG_COMMANDS:
            return HaveCommandArg1(state.cmd, byte), None
        if state.cmd in (SS_TAP_CODE, SS_DOWN_CODE, SS_UP_CODE):
            return Start, KEY_STEPS_BY_CODE[state.cmd](byte)
        raise ParseError("unknown macro command {} at byte {}".format(state.cmd, index))

    if isinstance(state, HaveCommandArg1):
        arg1, arg2 = state.arg1, byte
        if state.cmd == SS_DELAY_CODE:
            return Start, Delay((arg2 - 1) * 255 + (arg1 - 1))
        kc = arg1 | (arg2 << 8)
        if kc > 0xFF00:
            kc = (kc & 0xFF) << 8
        return Start, KEY_STEPS_BY_CODE[state.cmd](kc)

    raise ParseError("invalid decoder state {!r}".format(state))


def _decode_text(data, start, end):
    try:
        return Text(bytes(data[start:end]).decode("utf-8"))
    except UnicodeDecodeError as e:
        raise ParseError("macro text is not valid utf-8: {}".format(e)) from e


def deserialize_single(index, data):
    steps = []
    state = Start
    for x, byte in enumerate(data):
        state, emitted = step(state, x, byte)
        if isinstance(emitted, TextSpan):
            emitted = _decode_text(data, emitted.start, emitted.end)
        if emitted is not None:
            steps.append(emitted)

    if isinstance(state, InsideText):
        steps.append(_decode_text(data, state.start, len(data)))
    elif state is not Start:
        raise ParseError("macro {} is truncated".format(index))
    return Macro(index, steps)


def deserialize(data):
    """ Splits a raw macro buffer into Macro objects """

    if len(data) == 0 or (len(data) == 1 and data[0] == 0):
        return []

    macros = []
    start = 0
    for x, byte in enumerate(data):
        if byte == 0:
            macros.append(deserialize_single(len(macros), data[start:x]))
            start = x + 1
    return macros


def serialize(macros):
    out = b""
    for m in macros:
        out += m.serialize() + b"\x00"
    return out


def _step_from_string(text, generation):
    if "(" not in text or not text.endswith(")"):
        raise ParseError("can't parse macro step {}".format(text))
    action, arg = text.split("(", 1)
    arg = arg[:-1]
    if action in KEY_STEPS:
        return KEY_STEPS[action](name_to_id(arg, generation))
    if action == "Delay":
        if not arg.isdecimal():
            raise ParseError("delay should be a number of milliseconds, got {}".format(arg))
        return Delay(int(arg))
    if action == "Text":
        return Text(arg)
    raise ParseError("unknown macro step {}".format(action))


def _steps_from_json(data, generation):
    if not isinstance(data, list):
        raise ParseError("macro step should be an array")
    if len(data) < 2:
        raise ParseError("macro step array should be at least 2 elements long")
    action, args = data[0], data[1:]
    if not isinstance(action, str):
        raise ParseError("macro action should be a string")

    if action == "delay":
        if not all(isinstance(arg, int) and not isinstance(arg, bool) for arg in args):
            raise ParseError("delay argument should be a number")
        return [Delay(arg) for arg in args]
    if action == "text":
        if not all(isinstance(arg, str) for arg in args):
            raise ParseError("text argument should be a string")
        return [Text(arg) for arg in args]
    if action in KEY_STEPS_BY_ACTION:
        if not all(isinstance(arg, str) for arg in args):
            raise ParseError("{} argument should be a keycode string".format(action))
        return [KEY_STEPS_BY_ACTION[action](name_to_id(arg, generation)) for arg in args]
    raise ParseError("unknown macro step {}".format(action))


class Macro:

    def __init__(self, index, steps=None):
        self.index = index
        self.steps = list(steps or [])

    def serialize(self):
        return b"".join(s.serialize() for s in self.steps)

    def is_empty(self):
        return len(self.steps) == 0

    @classmethod
    def from_string(cls, index, value, generation):
        """ Parses the "Tap(KC_A); Delay(100); Text(hi)" form """
        steps = []
        for part in value.split(";"):
            part = part.strip()
            if part:
                steps.append(_step_from_string(part, generation))
        return cls(index, steps)

    @classmethod
    def from_json(cls, index, data, generation):
        if not isinstance(data, list):
            raise ParseError("macro should be defined as array of macro steps")
        steps = []
        for s in data:
            steps.extend(_steps_from_json(s, generation))
        return cls(index, steps)

    def to_json(self, generation):
        return [s.to_json(generation) for s in self.steps]

    def describe(self, generation):
        if self.is_empty():
            return "{}) EMPTY".format(self.index)
        return "{}) {}".format(self.index, "; ".join(s.describe(generation) for s in self.steps))

    def __repr__(self):
        return "Macro<{} {}>".format(self.index, self.steps)

    def __eq__(self, other):
        # steps are plain tuples underneath, Tap(4) == Down(4) unless the type is compared too
        return isinstance(other, Macro) and self.index == other.index \
            and [(type(s), s) for s in self.steps] == [(type(s), s) for s in other.steps]


def macros_from_json(data, generation):
    if not isinstance(data, list):
        raise ParseError("macros should be an array")
    return [Macro.from_json(x, m, generation) for x, m in enumerate(data)]


def macros_to_json(macros, generation):
    return [m.to_json(generation) for m in macros]


class ProtocolMacro(BaseProtocol):

    def reload_macros(self):
        """ Reads the macro buffer up to the last macro the keyboard has """

        self.macros = []
        if self.macro_count == 0 or self.macro_memory == 0:
            return

        data = b""
        seen = 0
        last_zero = False
        while len(data) < self.macro_memory:
            offset = len(data)
            sz = min(self.macro_memory - offset, BUFFER_FETCH_CHUNK)
            chunk = self.via_query(struct.pack(">BHB", CMD_VIA_MACRO_GET_BUFFER, offset, sz)).unwrap("macros")
            chunk = chunk[4:4 + sz]

            for x, byte in enumerate(chunk):
                if byte != 0:
                    last_zero = False
                    continue
                if last_zero:
                    # two zeros in a row, rest of the buffer is unused
                    self.macros = deserialize(data + chunk[:x])
                    return
                last_zero = True
                seen += 1
                if seen == self.macro_count:
                    self.macros = deserialize(data + chunk[:x + 1])
                    return
            data += chunk

        self.macros = deserialize(data)

    def set_macros(self, macros):
        """ Writes all macros at once, the unused tail of the buffer is zeroed """

        if len(macros) > self.macro_count:
            raise CapacityError("too many macros: {}, keyboard supports {}".format(len(macros), self.macro_count))
        data = serialize(macros)
        if len(data) > self.macro_memory:
            raise CapacityError("macros take {} bytes, keyboard buffer is {} bytes".format(
                len(data), self.macro_memory))

        if self.vial_protocol > 0:
            status = Unlocker.status(self)
            if status.locked:
                raise StateError("keyboard is locked, unlock it before writing macros")

        data += b"\x00" * (self.macro_memory - len(data))
        for offset in range(0, self.macro_memory, BUFFER_FETCH_CHUNK):
            chunk = data[offset:offset + BUFFER_FETCH_CHUNK]
            self.via_query(struct.pack(">BHB", CMD_VIA_MACRO_SET_BUFFER, offset, len(chunk)) + chunk) \
                .unwrap("macros")
        logging.debug("set_macros: wrote %d macros, %d bytes", len(macros), len(data))
        self.macros = list(macros)
