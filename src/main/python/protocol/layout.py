# SPDX-License-Identifier: GPL-2.0-or-later
"""
Layout options: the 32-bit VIA keyboard value selecting between physical layout variants.

Each group from layouts.labels owns a span of bits, allocated from bit 0 starting
with the last label. A boolean group takes one bit; a group of N variants takes
N - 1 bits where variant v > 0 sets bit v - 1 of the span and variant 0 is all
zeroes.
"""
import logging
import struct
from collections import namedtuple

from protocol.base_protocol import BaseProtocol
from protocol.constants import CMD_VIA_GET_KEYBOARD_VALUE, CMD_VIA_SET_KEYBOARD_VALUE, VIA_LAYOUT_OPTIONS
from protocol.errors import ParseError

LayoutGroup = namedtuple("LayoutGroup", ["name", "variants", "start_bit"])


class LayoutOptions:

    def __init__(self, state=0, groups=None):
        self.state = state
        self.groups = list(groups or [])
        for group in self.groups:
            if group.start_bit + max(len(group.variants) - 1, 1) > 32:
                raise ParseError("layout option {} does not fit into 32 bits".format(group.name))

    def is_empty(self):
        return len(self.groups) == 0

    @classmethod
    def from_labels(cls, state, labels):
        if labels is None:
            return cls(state)
        if not isinstance(labels, list):
            raise ParseError("layout/labels should be an array")

        groups = []
        start_bit = 0
        for label in reversed(labels):
            if isinstance(label, str):
                groups.append(LayoutGroup(label, ["false", "true"], start_bit))
                start_bit += 1
            elif isinstance(label, list):
                if len(label) < 2 or not all(isinstance(x, str) for x in label):
                    raise ParseError("array layout/labels should be array of strings")
                groups.append(LayoutGroup(label[0], label[1:], start_bit))
                start_bit += len(label) - 2
            else:
                raise ParseError("labels should be string or array of strings")
        groups.reverse()
        return cls(state, groups)

    @staticmethod
    def _span(group):
        ignore_high_bits = 33 - group.start_bit - len(group.variants)
        return ignore_high_bits, ((0xFFFFFFFF << ignore_high_bits) & 0xFFFFFFFF) \
            >> (group.start_bit + ignore_high_bits) << group.start_bit

    def selections(self):
        """ Returns [(group index, selected variant index)] decoded from the state """

        result = []
        for group_idx, group in enumerate(self.groups):
            ignore_high_bits, _ = self._span(group)
            bits = ((self.state << ignore_high_bits) & 0xFFFFFFFF) >> (group.start_bit + ignore_high_bits)
            for variant_idx in range(len(group.variants)):
                if (bits == 0 and variant_idx == 0) or (variant_idx > 0 and bits >> (variant_idx - 1) == 1):
                    result.append((group_idx, variant_idx))
        return result

    def select(self, group_idx, variant_idx):
        if not 0 <= group_idx < len(self.groups):
            raise ParseError("no layout option {}".format(group_idx))
        group = self.groups[group_idx]
        if not 0 <= variant_idx < len(group.variants):
            raise ParseError("layout option {} has no variant {}".format(group.name, variant_idx))

        _, span = self._span(group)
        bit = 0 if variant_idx == 0 else 1 << (variant_idx - 1 + group.start_bit)
        self.state = (self.state & ~span & 0xFFFFFFFF) | bit

    def __str__(self):
        selected = set(self.selections())
        out = ""
        for group_idx, group in enumerate(self.groups):
            out += "{}) {}:\n".format(group_idx, group.name)
            for variant_idx, variant in enumerate(group.variants):
                if (group_idx, variant_idx) in selected:
                    out += "\t{}) {} <= currently selected\n".format(variant_idx, variant)
                else:
                    out += "\t{}) {}\n".format(variant_idx, variant)
        return out

    def __repr__(self):
        return "LayoutOptions<{:08X} {}>".format(self.state, self.groups)


class ProtocolLayout(BaseProtocol):

    layout_options = -1

    def reload_layout_options(self):
        data = self.via_query(struct.pack("BB", CMD_VIA_GET_KEYBOARD_VALUE, VIA_LAYOUT_OPTIONS)) \
            .unwrap("layout options")
        self.layout_options = struct.unpack(">I", data[2:6])[0]
        return self.layout_options

    def set_layout_options(self, options):
        self.via_query(struct.pack(">BBI", CMD_VIA_SET_KEYBOARD_VALUE, VIA_LAYOUT_OPTIONS, options)) \
            .unwrap("layout options")
        logging.debug("set_layout_options: %08X", options)
        self.layout_options = options
