# SPDX-License-Identifier: GPL-2.0-or-later
import logging
import struct

from keycodes.keycodes import name_to_id, id_to_name
from protocol.base_protocol import BaseProtocol
from protocol.constants import CMD_VIA_VIAL_PREFIX, CMD_VIAL_GET_ENCODER, CMD_VIAL_SET_ENCODER
from protocol.dynamic import json_str
from protocol.errors import ParseError

ENCODER_CCW = 0
ENCODER_CW = 1


class EncoderEntry:
    """ Keycodes sent when an encoder turns counter-clockwise / clockwise on one layer """

    def __init__(self, index, ccw=0, cw=0):
        self.index = index
        self.ccw = ccw
        self.cw = cw

    def get(self, direction):
        if direction == ENCODER_CCW:
            return self.ccw
        if direction == ENCODER_CW:
            return self.cw
        raise ParseError("direction should be 0 or 1")

    def to_json(self, generation):
        return [id_to_name(self.ccw, generation), id_to_name(self.cw, generation)]

    @classmethod
    def from_json(cls, index, data, generation):
        if not isinstance(data, list) or len(data) != 2:
            raise ParseError("encoder values should be an array with two elements")
        ccw, cw = (name_to_id(json_str(v, "encoder"), generation) for v in data)
        return cls(index, ccw, cw)

    def __repr__(self):
        return "Encoder<{} ccw={} cw={}>".format(self.index, self.ccw, self.cw)

    def __eq__(self, other):
        return isinstance(other, EncoderEntry) and (self.index, self.ccw, self.cw) == \
            (other.index, other.ccw, other.cw)


def encoders_from_json(data, generation):
    """ [[[ccw, cw], ...] per layer] -> {(layer, index): EncoderEntry} """

    out = dict()
    if data is None:
        return out
    if not isinstance(data, list):
        raise ParseError("encoders should be encoded as array of arrays of arrays")
    for layer, encoders in enumerate(data):
        if not isinstance(encoders, list):
            raise ParseError("encoders should be encoded as array of arrays of arrays")
        for idx, e in enumerate(encoders):
            out[(layer, idx)] = EncoderEntry.from_json(idx, e, generation)
    return out


def encoders_to_json(encoders, layers, count, generation):
    return [[encoders[(layer, idx)].to_json(generation) for idx in range(count)] for layer in range(layers)]


class ProtocolEncoder(BaseProtocol):

    def reload_encoders(self, count):
        encoders = dict()
        for layer in range(self.layers):
            for idx in range(count):
                data = self.via_query(struct.pack("BBBB", CMD_VIA_VIAL_PREFIX, CMD_VIAL_GET_ENCODER, layer, idx)) \
                    .unwrap("encoders")
                ccw, cw = struct.unpack(">HH", data[0:4])
                encoders[(layer, idx)] = EncoderEntry(idx, ccw, cw)
        self.encoder_count = count
        self.encoders = encoders

    def set_encoder(self, layer, index, direction, code):
        if direction not in (ENCODER_CCW, ENCODER_CW):
            raise ParseError("direction should be 0 or 1")
        entry = self.encoders.get((layer, index))
        if entry is not None and entry.get(direction) == code:
            return

        self.via_query(struct.pack(">BBBBBH", CMD_VIA_VIAL_PREFIX, CMD_VIAL_SET_ENCODER,
                                   layer, index, direction, code)).unwrap("encoders")
        logging.debug("set_encoder: layer=%d index=%d direction=%d code=%04X", layer, index, direction, code)

        if entry is None:
            entry = self.encoders[(layer, index)] = EncoderEntry(index)
        if direction == ENCODER_CCW:
            entry.ccw = code
        else:
            entry.cw = code
