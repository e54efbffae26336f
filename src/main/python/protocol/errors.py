# SPDX-License-Identifier: GPL-2.0-or-later


class ProtocolError(Exception):
    pass


class TransportError(ProtocolError):
    """ HID write/read failed """
    pass


class ProtocolUnhandledError(ProtocolError):
    """ Keyboard answered that it does not implement the requested command """

    def __init__(self, what="command"):
        super().__init__("keyboard does not support {}".format(what))
        self.what = what


class ParseError(ProtocolError, ValueError):
    pass


class KeycodeParseError(ParseError):
    pass


class CapacityError(ProtocolError):
    pass


class StateError(ProtocolError):
    pass
