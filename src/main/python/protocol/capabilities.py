# SPDX-License-Identifier: GPL-2.0-or-later
import logging
import struct
from collections import namedtuple

from keycodes.keycodes import Generation
from protocol.base_protocol import checked
from protocol.constants import CMD_VIA_GET_PROTOCOL_VERSION, CMD_VIA_VIAL_PREFIX, CMD_VIAL_GET_KEYBOARD_ID, \
    HID_LAYERS_IN, HID_LAYERS_GET_VERSION, HID_LAYERS_OUT_VERSION, CMD_VIA_GET_LAYER_COUNT, \
    CMD_VIA_MACRO_GET_COUNT, CMD_VIA_MACRO_GET_BUFFER_SIZE, VIAL_PROTOCOL_DYNAMIC, CMD_VIAL_DYNAMIC_ENTRY_OP, \
    DYNAMIC_VIAL_GET_NUMBER_OF_ENTRIES, DYNAMIC_FLAG_CAPS_WORD, DYNAMIC_FLAG_LAYER_LOCK
from protocol.errors import TransportError
from util import hid_send


class Capabilities(namedtuple("Capabilities", [
        "via_version", "vial_version", "companion_hid_version",
        "layer_count", "macro_count", "macro_buffer_size",
        "tap_dance_count", "combo_count", "key_override_count", "alt_repeat_key_count",
        "caps_word", "layer_lock"])):
    """ What the connected keyboard reported about itself, fixed for the session """

    @property
    def generation(self):
        return Generation.from_vial_version(self.vial_version)

    @property
    def dynamic_entries(self):
        return self.vial_version >= VIAL_PROTOCOL_DYNAMIC


def scan_capabilities(dev, usb_send=hid_send):
    """
    Probes the keyboard in a fixed order. Optional features answering 0xFF
    are reported as zero; transport failures abort the scan.
    """

    via_version = usb_send(dev, struct.pack("B", CMD_VIA_GET_PROTOCOL_VERSION))[2]
    logging.debug("scan_capabilities: via_version=%d", via_version)

    data = checked(usb_send(dev, struct.pack("BB", CMD_VIA_VIAL_PREFIX, CMD_VIAL_GET_KEYBOARD_ID)))
    vial_version = struct.unpack("<I", data.data[0:4])[0] if data else 0
    logging.debug("scan_capabilities: vial_version=%d", vial_version)

    companion_hid_version = 0
    try:
        data = usb_send(dev, struct.pack("BB", HID_LAYERS_IN, HID_LAYERS_GET_VERSION))
        if data[0] == HID_LAYERS_OUT_VERSION:
            companion_hid_version = data[1]
    except TransportError as e:
        logging.warning("scan_capabilities: no answer to companion hid probe: %s", e)
    logging.debug("scan_capabilities: companion_hid_version=%d", companion_hid_version)

    layer_count = 0
    if via_version != 0:
        data = checked(usb_send(dev, struct.pack("B", CMD_VIA_GET_LAYER_COUNT)))
        layer_count = data.data[1] if data else 0
    logging.debug("scan_capabilities: layer_count=%d", layer_count)

    data = checked(usb_send(dev, struct.pack("B", CMD_VIA_MACRO_GET_COUNT)))
    macro_count = data.data[1] if data else 0
    data = checked(usb_send(dev, struct.pack("B", CMD_VIA_MACRO_GET_BUFFER_SIZE)))
    macro_buffer_size = struct.unpack(">H", data.data[1:3])[0] if data else 0
    logging.debug("scan_capabilities: macro_count=%d macro_buffer_size=%d", macro_count, macro_buffer_size)

    if vial_version < VIAL_PROTOCOL_DYNAMIC:
        return Capabilities(via_version, vial_version, companion_hid_version,
                            layer_count, macro_count, macro_buffer_size,
                            0, 0, 0, 0, False, False)

    data = checked(usb_send(dev, struct.pack("BBB", CMD_VIA_VIAL_PREFIX, CMD_VIAL_DYNAMIC_ENTRY_OP,
                                             DYNAMIC_VIAL_GET_NUMBER_OF_ENTRIES))).unwrap("dynamic entries")
    tap_dance_count, combo_count, key_override_count, alt_repeat_key_count = data[0:4]
    flags = data[31]
    logging.debug("scan_capabilities: tap_dance=%d combo=%d key_override=%d alt_repeat_key=%d flags=%02X",
                  tap_dance_count, combo_count, key_override_count, alt_repeat_key_count, flags)

    return Capabilities(via_version, vial_version, companion_hid_version,
                        layer_count, macro_count, macro_buffer_size,
                        tap_dance_count, combo_count, key_override_count, alt_repeat_key_count,
                        bool(flags & DYNAMIC_FLAG_CAPS_WORD), bool(flags & DYNAMIC_FLAG_LAYER_LOCK))
