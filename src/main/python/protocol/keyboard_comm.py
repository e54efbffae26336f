# SPDX-License-Identifier: GPL-2.0-or-later
import struct
import json
import lzma
import logging

from protocol.alt_repeat_key import ProtocolAltRepeatKey
from protocol.capabilities import scan_capabilities
from protocol.combo import ProtocolCombo
from protocol.constants import CMD_VIA_SET_KEYCODE, CMD_VIA_KEYMAP_GET_BUFFER, CMD_VIA_VIAL_PREFIX, \
    CMD_VIAL_GET_KEYBOARD_ID, CMD_VIAL_GET_SIZE, CMD_VIAL_GET_DEFINITION, BUFFER_FETCH_CHUNK, \
    VIAL_PROTOCOL_QMK_SETTINGS
from protocol.dynamic import ProtocolDynamic
from protocol.encoder import ProtocolEncoder
from protocol.errors import ProtocolError
from protocol.key_override import ProtocolKeyOverride
from protocol.layout import ProtocolLayout, LayoutOptions
from protocol.macro import ProtocolMacro
from protocol.qmk_settings import ProtocolQmkSettings
from protocol.tap_dance import ProtocolTapDance
from util import MSG_LEN, hid_send


class Keyboard(ProtocolMacro, ProtocolDynamic, ProtocolTapDance, ProtocolCombo, ProtocolKeyOverride,
               ProtocolAltRepeatKey, ProtocolEncoder, ProtocolLayout, ProtocolQmkSettings):
    """ Low-level communication with a vial-enabled keyboard """

    def __init__(self, dev, usb_send=hid_send):
        self.dev = dev
        self.usb_send = usb_send
        self.capabilities = None
        self.definition = None

        self.layout = dict()
        self.encoders = dict()
        self.encoder_count = 0
        self.rows = self.cols = self.layers = 0
        self.layout_labels = None
        self.layout_options = -1
        self.keyboard_uid = None

        self.macros = []
        self.settings = dict()
        self.supported_settings = []

    def reload(self):
        """ Negotiates capabilities, then loads everything the keyboard says it has """

        self.reload_capabilities()

        if self.vial_protocol > 0:
            self.reload_keyboard_uid()
            self.reload_definition()
            if self.layout_labels:
                self.reload_layout_options()
            self.reload_keymap(self.rows, self.cols)

        self.reload_macros()
        self.reload_dynamic()

        if self.vial_protocol >= VIAL_PROTOCOL_QMK_SETTINGS:
            self.reload_qsids()

    def reload_capabilities(self):
        caps = scan_capabilities(self.dev, self.usb_send)
        self.capabilities = caps

        self.via_protocol = caps.via_version
        self.vial_protocol = caps.vial_version
        self.generation = caps.generation
        self.layers = caps.layer_count
        self.macro_count = caps.macro_count
        self.macro_memory = caps.macro_buffer_size
        self.tap_dance_count = caps.tap_dance_count
        self.combo_count = caps.combo_count
        self.key_override_count = caps.key_override_count
        self.alt_repeat_key_count = caps.alt_repeat_key_count
        logging.info("Keyboard: via=%d vial=%d generation=%s layers=%d", caps.via_version, caps.vial_version,
                     caps.generation.name, caps.layer_count)
        return caps

    def reload_keyboard_uid(self):
        data = self.via_send(struct.pack("BB", CMD_VIA_VIAL_PREFIX, CMD_VIAL_GET_KEYBOARD_ID))
        self.keyboard_uid = struct.unpack("<Q", data[4:12])[0]
        return self.keyboard_uid

    def reload_definition(self):
        """ Fetches the lzma compressed keyboard json stored in firmware """

        data = self.via_query(struct.pack("BB", CMD_VIA_VIAL_PREFIX, CMD_VIAL_GET_SIZE)).unwrap("keyboard definition")
        sz = struct.unpack("<I", data[0:4])[0]
        logging.debug("reload_definition: %d bytes", sz)

        payload = b""
        block = 0
        while sz > 0:
            data = self.via_send(struct.pack("<BBI", CMD_VIA_VIAL_PREFIX, CMD_VIAL_GET_DEFINITION, block))
            if sz < MSG_LEN:
                data = data[:sz]
            payload += data
            block += 1
            sz -= MSG_LEN

        try:
            definition = json.loads(lzma.decompress(payload))
        except (lzma.LZMAError, ValueError) as e:
            raise ProtocolError("cannot decode keyboard definition: {}".format(e)) from e

        self.definition = definition
        self.rows = definition["matrix"]["rows"]
        self.cols = definition["matrix"]["cols"]
        self.layout_labels = definition.get("layouts", {}).get("labels")
        return definition

    def reload_keymap(self, rows, cols):
        """ Load current key mapping from the keyboard """

        self.rows, self.cols = rows, cols

        keymap = b""
        # calculate what the size of keymap will be and retrieve the entire binary buffer
        size = self.layers * rows * cols * 2
        for x in range(0, size, BUFFER_FETCH_CHUNK):
            offset = x
            sz = min(size - offset, BUFFER_FETCH_CHUNK)
            data = self.via_query(struct.pack(">BHB", CMD_VIA_KEYMAP_GET_BUFFER, offset, sz)).unwrap("keymap")
            keymap += data[4:4+sz]

        layout = dict()
        for layer in range(self.layers):
            for row in range(rows):
                for col in range(cols):
                    # determine where this (layer, row, col) will be located in keymap array
                    offset = layer * rows * cols * 2 + row * cols * 2 + col * 2
                    layout[(layer, row, col)] = struct.unpack(">H", keymap[offset:offset+2])[0]
        self.layout = layout

    def set_key(self, layer, row, col, code):
        key = (layer, row, col)
        if self.layout.get(key) != code:
            self.via_write(struct.pack(">BBBBH", CMD_VIA_SET_KEYCODE, layer, row, col, code))
            self.layout[key] = code

    def get_layout_options(self):
        return LayoutOptions.from_labels(max(self.layout_options, 0), self.layout_labels)
