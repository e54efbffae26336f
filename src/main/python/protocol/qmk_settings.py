# SPDX-License-Identifier: GPL-2.0-or-later
import json
import logging
import struct
from collections import defaultdict, namedtuple

from protocol.base_protocol import BaseProtocol
from protocol.constants import CMD_VIA_VIAL_PREFIX, CMD_VIAL_QMK_SETTINGS_QUERY, CMD_VIAL_QMK_SETTINGS_GET, \
    CMD_VIAL_QMK_SETTINGS_SET, CMD_VIAL_QMK_SETTINGS_RESET, VIAL_PROTOCOL_QMK_SETTINGS
from protocol.errors import ProtocolError, ProtocolUnhandledError, ParseError
from util import MSG_LEN

QSID_END = 0xFFFF
SUPPORTED_WIDTHS = (1, 2, 4)


class QmkValue(namedtuple("QmkValue", ["value", "width"])):

    def get(self):
        return self.value

    def get_bool(self, bit):
        return self.value & (1 << bit) != 0


class QmkSettingField(namedtuple("QmkSettingField", ["qsid", "title", "width", "type", "bit"])):
    """ One entry of qmk_settings.json; boolean fields with a bit share a qsid """

    def __new__(cls, qsid, title, width=1, type="integer", bit=None):
        return super().__new__(cls, qsid, title, width, type, bit)

    @property
    def is_bool(self):
        return self.type == "boolean"


class QmkSettingsCatalog:
    """ Description of the settings firmware may expose, grouped into named tabs """

    def __init__(self, tabs):
        self.tabs = tabs
        self.qsid_fields = defaultdict(list)
        for name, fields in tabs:
            for field in fields:
                self.qsid_fields[field.qsid].append(field)

    @classmethod
    def from_json(cls, data):
        if isinstance(data, (str, bytes)):
            data = json.loads(data)
        if not isinstance(data, dict) or not isinstance(data.get("tabs"), list):
            raise ParseError("tabs should be an array")

        tabs = []
        for tab in data["tabs"]:
            if not isinstance(tab.get("fields"), list):
                raise ParseError("fields should be an array")
            fields = []
            for field in tab["fields"]:
                if not isinstance(field.get("qsid"), int):
                    raise ParseError("qsid should be a number")
                if not isinstance(field.get("title"), str):
                    raise ParseError("title should be a string")
                fields.append(QmkSettingField(field["qsid"], field["title"], field.get("width", 1),
                                              field.get("type", "integer"), field.get("bit")))
            tabs.append((tab.get("name", ""), fields))
        return cls(tabs)

    def fields_for(self, qsid):
        return list(self.qsid_fields.get(qsid, []))

    def width_for(self, qsid):
        fields = self.qsid_fields.get(qsid)
        return fields[0].width if fields else 1

    def find(self, qsid, bit=None):
        for field in self.qsid_fields.get(qsid, []):
            if field.bit is None or field.bit == bit:
                return field
        raise ParseError("unknown setting {}".format(qsid if bit is None else "{}.{}".format(qsid, bit)))

    @staticmethod
    def describe_field(field, value):
        if field.is_bool and field.bit is not None:
            return "{}.{}) {} = {}".format(field.qsid, field.bit, field.title,
                                           str(value.get_bool(field.bit)).lower())
        if field.is_bool:
            return "{}) {} = {}".format(field.qsid, field.title, str(value.get() != 0).lower())
        return "{}) {} = {}".format(field.qsid, field.title, value.get())

    def describe(self, values):
        """ Pretty print of every known field for which values holds a QmkValue """

        lines = []
        for name, fields in self.tabs:
            lines.append("")
            lines.append("{}:".format(name))
            for field in fields:
                if field.qsid in values:
                    lines.append("\t" + self.describe_field(field, values[field.qsid]))
        return "\n".join(lines)

    @staticmethod
    def set_field(kb, field, value):
        """ Writes one field; bit fields read the current value first and flip just their bit """

        if field.bit is not None:
            current = kb.qmk_setting_get(field.qsid, field.width).get()
            if value:
                current |= 1 << field.bit
            else:
                current &= ~(1 << field.bit)
            value = current
        elif field.is_bool:
            value = int(bool(value))
        kb.qmk_setting_set(field.qsid, value)
        return value


def settings_from_json(data):
    if not isinstance(data, dict):
        raise ParseError("Settings should be an object")
    result = dict()
    for key, value in data.items():
        if not str(key).isdecimal():
            raise ParseError("setting id {} should be a number".format(key))
        if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= 0xFFFFFFFF:
            raise ParseError("value of setting {} should be u32".format(key))
        result[int(key)] = value
    return result


def settings_to_json(settings):
    return {str(qsid): int(value) for qsid, value in sorted(settings.items())}


class ProtocolQmkSettings(BaseProtocol):

    def _check_qmk_settings(self):
        if self.vial_protocol < VIAL_PROTOCOL_QMK_SETTINGS:
            raise ProtocolUnhandledError("qmk settings")

    def reload_qsids(self):
        """ Returns every qsid the firmware supports, the device pages through them from a cursor """

        self._check_qmk_settings()
        qsids = []
        cur = 0
        while True:
            data = self.via_send(struct.pack("<BBH", CMD_VIA_VIAL_PREFIX, CMD_VIAL_QMK_SETTINGS_QUERY, cur))
            done = False
            for x in range(0, MSG_LEN, 2):
                qsid = struct.unpack("<H", data[x:x + 2])[0]
                cur = max(cur, qsid)
                if qsid == QSID_END:
                    done = True
                    break
                qsids.append(qsid)
            if done:
                break
        logging.debug("reload_qsids: %s", qsids)
        self.supported_settings = qsids
        return qsids

    def reload_settings(self, catalog):
        """ Reads the value of every supported qsid the catalog knows about """

        self.settings = dict()
        for qsid in self.reload_qsids():
            if qsid in catalog.qsid_fields and qsid not in self.settings:
                self.settings[qsid] = self.qmk_setting_get(qsid, catalog.width_for(qsid))

    def qmk_setting_get(self, qsid, width=1):
        self._check_qmk_settings()
        data = self.via_send(struct.pack("<BBH", CMD_VIA_VIAL_PREFIX, CMD_VIAL_QMK_SETTINGS_GET, qsid))
        if data[0] != 0:
            raise ProtocolUnhandledError("qmk setting {}".format(qsid))
        if width not in SUPPORTED_WIDTHS:
            width = 1
        return QmkValue(int.from_bytes(data[1:1 + width], byteorder="little"), width)

    def qmk_setting_set(self, qsid, value):
        self._check_qmk_settings()
        data = self.via_send(struct.pack("<BBHI", CMD_VIA_VIAL_PREFIX, CMD_VIAL_QMK_SETTINGS_SET, qsid, value))
        if data[0] != 0:
            raise ProtocolError("failed to set qmk setting {}, status {}".format(qsid, data[0]))
        logging.debug("qmk_setting_set: %d = %d", qsid, value)
        if qsid in self.settings:
            self.settings[qsid] = QmkValue(value, self.settings[qsid].width)

    def qmk_settings_reset(self):
        self._check_qmk_settings()
        data = self.via_send(struct.pack("BB", CMD_VIA_VIAL_PREFIX, CMD_VIAL_QMK_SETTINGS_RESET))
        if data[0] != 0:
            raise ProtocolError("failed to reset qmk settings, status {}".format(data[0]))
