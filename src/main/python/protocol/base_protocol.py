# SPDX-License-Identifier: GPL-2.0-or-later
import struct
from collections import namedtuple

from keycodes.keycodes import Generation
from protocol.constants import CMD_VIA_VIAL_PREFIX, CMD_VIAL_DYNAMIC_ENTRY_OP, VIA_UNHANDLED
from protocol.errors import ProtocolUnhandledError
from util import hid_send, hid_write, RECV_ATTEMPTS


class Present(namedtuple("Present", ["data"])):
    """ Device answered the request """

    def unwrap(self, what=None):
        return self.data


class Absent:
    """ Device answered 0xFF: the command is not implemented """

    def __bool__(self):
        return False

    def unwrap(self, what="command"):
        raise ProtocolUnhandledError(what)

    def __repr__(self):
        return "ABSENT"


ABSENT = Absent()


def checked(data):
    if data[0] == VIA_UNHANDLED:
        return ABSENT
    return Present(data)


class BaseProtocol:
    usb_send = staticmethod(hid_send)
    dev = None

    via_protocol = -1
    vial_protocol = -1
    generation = Generation.CURRENT

    layers = 0
    macro_count = 0
    macro_memory = 0

    tap_dance_count = 0
    combo_count = 0
    key_override_count = 0
    alt_repeat_key_count = 0

    def via_send(self, msg, retries=RECV_ATTEMPTS):
        """ Sends a request and returns the raw 32-byte answer """
        return self.usb_send(self.dev, msg, retries=retries)

    def via_query(self, msg, retries=RECV_ATTEMPTS):
        """ Sends a request, answer is Present(data) or ABSENT """
        return checked(self.via_send(msg, retries=retries))

    def via_write(self, msg):
        """ Fire-and-forget request, the device does not answer """
        hid_write(self.dev, msg)

    def _retrieve_dynamic_entries(self, cmd, count, fmt, what):
        out = []
        for x in range(count):
            data = self.via_query(struct.pack("BBBB", CMD_VIA_VIAL_PREFIX, CMD_VIAL_DYNAMIC_ENTRY_OP, cmd, x)) \
                .unwrap(what)
            # status byte first, then the packed entry
            out.append(struct.unpack(fmt, data[1:1 + struct.calcsize(fmt)]))
        return out

    def _store_dynamic_entry(self, cmd, idx, payload):
        self.via_write(struct.pack("BBBB", CMD_VIA_VIAL_PREFIX, CMD_VIAL_DYNAMIC_ENTRY_OP, cmd, idx) + payload)
