# coding: utf-8

# SPDX-License-Identifier: GPL-2.0-or-later

from collections import namedtuple
from enum import Enum

from keycodes import keycodes_v5 as v5
from keycodes import keycodes_v6 as v6
from keycodes.keycodes_v5 import keycodes_v5
from keycodes.keycodes_v6 import keycodes_v6
from protocol.constants import VIAL_PROTOCOL_KEYCODES_V6
from protocol.errors import KeycodeParseError


class Generation(Enum):
    LEGACY = 5
    CURRENT = 6

    @classmethod
    def from_vial_version(cls, vial_version):
        if vial_version < VIAL_PROTOCOL_KEYCODES_V6:
            return cls.LEGACY
        return cls.CURRENT


# 5-bit mods used by MT/LM/OSM, bit 0x10 selects the right hand
MOD_LCTL = 0x01
MOD_LSFT = 0x02
MOD_LALT = 0x04
MOD_LGUI = 0x08
MOD_RCTL = 0x11
MOD_RSFT = 0x12
MOD_RALT = 0x14
MOD_RGUI = 0x18

MOD_TOKENS = {
    "MOD_LCTL": MOD_LCTL, "LCTL": MOD_LCTL, "CTL": MOD_LCTL, "C": MOD_LCTL,
    "MOD_LSFT": MOD_LSFT, "LSFT": MOD_LSFT, "SFT": MOD_LSFT, "S": MOD_LSFT,
    "MOD_LALT": MOD_LALT, "LALT": MOD_LALT, "ALT": MOD_LALT, "A": MOD_LALT,
    "MOD_LGUI": MOD_LGUI, "LGUI": MOD_LGUI, "GUI": MOD_LGUI, "G": MOD_LGUI,
    "MOD_RCTL": MOD_RCTL, "RCTL": MOD_RCTL,
    "MOD_RSFT": MOD_RSFT, "RSFT": MOD_RSFT,
    "MOD_RALT": MOD_RALT, "RALT": MOD_RALT,
    "MOD_RGUI": MOD_RGUI, "RGUI": MOD_RGUI,
}

# 8-bit mods, one bit per physical modifier key
MOD_BIT_LCTRL = 0x01
MOD_BIT_LSHIFT = 0x02
MOD_BIT_LALT = 0x04
MOD_BIT_LGUI = 0x08
MOD_BIT_RCTRL = 0x10
MOD_BIT_RSHIFT = 0x20
MOD_BIT_RALT = 0x40
MOD_BIT_RGUI = 0x80

BITMOD_TOKENS = {
    "MOD_BIT_LCTRL": MOD_BIT_LCTRL, "MOD_LCTL": MOD_BIT_LCTRL, "LCTL": MOD_BIT_LCTRL,
    "LC": MOD_BIT_LCTRL, "CTL": MOD_BIT_LCTRL, "C": MOD_BIT_LCTRL,
    "MOD_BIT_LSHIFT": MOD_BIT_LSHIFT, "MOD_LSFT": MOD_BIT_LSHIFT, "LSFT": MOD_BIT_LSHIFT,
    "LS": MOD_BIT_LSHIFT, "SFT": MOD_BIT_LSHIFT, "S": MOD_BIT_LSHIFT,
    "MOD_BIT_LALT": MOD_BIT_LALT, "MOD_LALT": MOD_BIT_LALT, "LALT": MOD_BIT_LALT,
    "LA": MOD_BIT_LALT, "ALT": MOD_BIT_LALT, "A": MOD_BIT_LALT,
    "MOD_BIT_LGUI": MOD_BIT_LGUI, "MOD_LGUI": MOD_BIT_LGUI, "LGUI": MOD_BIT_LGUI,
    "LG": MOD_BIT_LGUI, "GUI": MOD_BIT_LGUI, "G": MOD_BIT_LGUI,
    "MOD_BIT_RCTRL": MOD_BIT_RCTRL, "MOD_RCTL": MOD_BIT_RCTRL, "RCTL": MOD_BIT_RCTRL, "RC": MOD_BIT_RCTRL,
    "MOD_BIT_RSHIFT": MOD_BIT_RSHIFT, "MOD_RSFT": MOD_BIT_RSHIFT, "RSFT": MOD_BIT_RSHIFT, "RS": MOD_BIT_RSHIFT,
    "MOD_BIT_RALT": MOD_BIT_RALT, "MOD_RALT": MOD_BIT_RALT, "RALT": MOD_BIT_RALT, "RA": MOD_BIT_RALT,
    "MOD_BIT_RGUI": MOD_BIT_RGUI, "MOD_RGUI": MOD_BIT_RGUI, "RGUI": MOD_BIT_RGUI, "RG": MOD_BIT_RGUI,
}

BITMOD_ORDER = (
    (MOD_BIT_RCTRL, "MOD_BIT_RCTRL"),
    (MOD_BIT_LCTRL, "MOD_BIT_LCTRL"),
    (MOD_BIT_RSHIFT, "MOD_BIT_RSHIFT"),
    (MOD_BIT_LSHIFT, "MOD_BIT_LSHIFT"),
    (MOD_BIT_RALT, "MOD_BIT_RALT"),
    (MOD_BIT_LALT, "MOD_BIT_LALT"),
    (MOD_BIT_RGUI, "MOD_BIT_RGUI"),
    (MOD_BIT_LGUI, "MOD_BIT_LGUI"),
)

# FUNC(kc) wrappers: name to the high byte they OR onto the inner keycode,
# the first name is the one printed back
MOD_WRAPPERS = (
    (("LCTL", "QK_LCTL", "C"), 0x01),
    (("LSFT", "QK_LSFT", "S"), 0x02),
    (("LALT", "QK_LALT", "LOPT", "A"), 0x04),
    (("LGUI", "QK_LGUI", "LCMD", "LWIN", "G"), 0x08),
    (("RCTL", "QK_RCTL"), 0x11),
    (("RSFT", "QK_RSFT"), 0x12),
    (("RALT", "QK_RALT", "ALGR", "ROPT"), 0x14),
    (("RGUI", "QK_RGUI", "RCMD", "RWIN"), 0x18),
    (("HYPR",), 0x0F),
    (("MEH",), 0x07),
    (("LCAG",), 0x0D),
    (("LSG", "SGUI", "SCMD", "SWIN"), 0x0A),
    (("LAG",), 0x0C),
    (("RSG",), 0x1A),
    (("RAG",), 0x1C),
    (("LCA",), 0x05),
    (("LSA",), 0x06),
    (("RSA", "SAGR"), 0x16),
    (("RCS",), 0x13),
)

WRAPPER_BY_NAME = {name: high for names, high in MOD_WRAPPERS for name in names}
WRAPPER_BY_HIGH = {high: names[0] for names, high in MOD_WRAPPERS}

# KEY_T(kc) mod-tap shorthands
MOD_TAP_ALIASES = (
    (("LCTL_T", "CTL_T"), MOD_LCTL),
    (("RCTL_T",), MOD_RCTL),
    (("LSFT_T", "SFT_T"), MOD_LSFT),
    (("RSFT_T",), MOD_RSFT),
    (("LALT_T", "ALT_T", "LOPT_T", "OPT_T"), MOD_LALT),
    (("RALT_T", "ROPT_T", "ALGR_T"), MOD_RALT),
    (("LGUI_T", "GUI_T", "LCMD_T", "CMD_T", "LWIN_T", "WIN_T"), MOD_LGUI),
    (("RGUI_T", "RCMD_T", "RWIN_T"), MOD_RGUI),
    (("C_S_T",), MOD_LCTL | MOD_LSFT),
    (("MEH_T",), MOD_LCTL | MOD_LSFT | MOD_LALT),
    (("LCAG_T",), MOD_LCTL | MOD_LALT | MOD_LGUI),
    (("RCAG_T",), MOD_RCTL | MOD_RALT | MOD_RGUI),
    (("HYPR_T", "ALL_T"), MOD_LCTL | MOD_LSFT | MOD_LALT | MOD_LGUI),
    (("LSG_T", "SGUI_T", "SCMD_T", "SWIN_T"), MOD_LSFT | MOD_LGUI),
    (("LAG_T",), MOD_LALT | MOD_LGUI),
    (("RSG_T",), MOD_RSFT | MOD_RGUI),
    (("RAG_T",), MOD_RALT | MOD_RGUI),
    (("LCA_T",), MOD_LCTL | MOD_LALT),
    (("LSA_T",), MOD_LSFT | MOD_LALT),
    (("RSA_T", "SAGR_T"), MOD_RSFT | MOD_RALT),
    (("RCS_T",), MOD_RCTL | MOD_RSFT),
)

MOD_TAP_BY_NAME = {name: mod for names, mod in MOD_TAP_ALIASES for name in names}


# layer functions are (name, base, mask); the argument is ANDed with mask and ORed onto base
Numbering = namedtuple("Numbering", ["names", "kc", "short", "layer_functions", "osm", "lm", "mt_base",
                                     "hex_fallback"])
LayerMod = namedtuple("LayerMod", ["base", "layer_shift", "mod_mask"])

NUMBERING = {
    Generation.CURRENT: Numbering(
        names=keycodes_v6.names,
        kc=keycodes_v6.kc,
        short=keycodes_v6.short,
        layer_functions=(
            ("TO", v6.QK_TO, 0x1F),
            ("MO", v6.QK_MOMENTARY, 0x1F),
            ("DF", v6.QK_DEF_LAYER, 0x1F),
            ("PDF", v6.QK_PERSISTENT_DEF_LAYER, 0x1F),
            ("TG", v6.QK_TOGGLE_LAYER, 0x1F),
            ("OSL", v6.QK_ONE_SHOT_LAYER, 0x1F),
            ("TT", v6.QK_LAYER_TAP_TOGGLE, 0x1F),
        ),
        osm=(v6.QK_ONE_SHOT_MOD, 0x1F),
        lm=LayerMod(v6.QK_LAYER_MOD, 5, 0x1F),
        mt_base=v6.QK_MOD_TAP,
        hex_fallback=True,
    ),
    Generation.LEGACY: Numbering(
        names=keycodes_v5.names,
        kc=keycodes_v5.kc,
        short=keycodes_v5.short,
        layer_functions=(
            ("TO", v5.QK_TO, 0x0F),
            ("MO", v5.QK_MOMENTARY, 0xFF),
            ("DF", v5.QK_DEF_LAYER, 0xFF),
            ("TG", v5.QK_TOGGLE_LAYER, 0xFF),
            ("OSL", v5.QK_ONE_SHOT_LAYER, 0xFF),
            ("TT", v5.QK_LAYER_TAP_TOGGLE, 0xFF),
        ),
        osm=(v5.QK_ONE_SHOT_MOD, 0xFF),
        lm=LayerMod(v5.QK_LAYER_MOD, 4, 0x0F),
        mt_base=v5.QK_MOD_TAP,
        hex_fallback=False,
    ),
}

QK_LAYER_TAP = 0x4000
QK_TAP_DANCE = 0x5700

SHORT_LAYER_FUNCTIONS = ("TO", "MO", "TG")


def name_to_mod(mods):
    """ Parses "MOD_LCTL|MOD_LSFT" style into the 5-bit mod value """
    m = 0
    for token in mods.split("|"):
        if token not in MOD_TOKENS:
            raise KeycodeParseError("can't parse mod {}".format(token))
        m |= MOD_TOKENS[token]
    return m


def mod_to_name(mod):
    parts = []
    for right, left, right_name, left_name in (
            (MOD_RCTL, MOD_LCTL, "MOD_RCTL", "MOD_LCTL"),
            (MOD_RSFT, MOD_LSFT, "MOD_RSFT", "MOD_LSFT"),
            (MOD_RALT, MOD_LALT, "MOD_RALT", "MOD_LALT"),
            (MOD_RGUI, MOD_LGUI, "MOD_RGUI", "MOD_LGUI")):
        if mod & right == right:
            parts.append(right_name)
        elif mod & left == left:
            parts.append(left_name)
    return "|".join(parts) if parts else "KC_NO"


def name_to_bitmod(mods):
    """ Parses "MOD_BIT_LCTRL|RSFT" style into the 8-bit mod mask """
    m = 0
    for token in mods.split("|"):
        if token not in BITMOD_TOKENS:
            raise KeycodeParseError("can't parse mod {}".format(token))
        m |= BITMOD_TOKENS[token]
    return m


def bitmod_to_name(mod):
    parts = [name for bit, name in BITMOD_ORDER if mod & bit == bit]
    return "|".join(parts) if parts else "KC_NO"


def _parse_layer(layer):
    if not layer.isdecimal():
        raise KeycodeParseError("can't parse layer {} should be num".format(layer))
    return int(layer)


def _parse_num(num):
    if not num.isdecimal():
        raise KeycodeParseError("can't parse argument {} should be num".format(num))
    return int(num)


def _split_two(function, args):
    if "," not in args:
        raise KeycodeParseError("{} should have strictly two arguments {!r} doesn't match".format(function, args))
    return args.split(",", 1)


def name_to_id(name, generation):
    """ Converts a textual keycode expression such as MT(MOD_LCTL,KC_A) to its 16-bit value """

    numbering = NUMBERING[generation]
    n = name.replace(" ", "")

    if numbering.hex_fallback and n.startswith("0x"):
        try:
            code = int(n[2:], 16)
        except ValueError:
            raise KeycodeParseError("can't parse hex keycode {}".format(n)) from None
        if code > 0xFFFF:
            raise KeycodeParseError("keycode {} does not fit in 16 bits".format(n))
        return code

    if "(" not in n:
        if n not in numbering.kc:
            raise KeycodeParseError("can't find key {}".format(n))
        return numbering.kc[n]

    function, args = n.split("(", 1)
    if not args.endswith(")"):
        raise KeycodeParseError("missing closing parenthesis in {}".format(n))
    args = args[:-1]

    if function in WRAPPER_BY_NAME:
        return (WRAPPER_BY_NAME[function] << 8) | name_to_id(args, generation)

    for layer_function, base, mask in numbering.layer_functions:
        if function == layer_function:
            return base | (_parse_layer(args) & mask)

    if function == "OSM":
        base, mask = numbering.osm
        return base | (name_to_mod(args) & mask)

    if function == "LM":
        layer, mods = _split_two(function, args)
        lm = numbering.lm
        return lm.base | ((_parse_layer(layer) & 0xF) << lm.layer_shift) | (name_to_mod(mods) & lm.mod_mask)

    if function == "LT":
        layer, key = _split_two(function, args)
        return QK_LAYER_TAP | ((_parse_layer(layer) & 0xF) << 8) | (name_to_id(key, generation) & 0xFF)

    if function == "MT":
        mods, key = _split_two(function, args)
        return numbering.mt_base | ((name_to_mod(mods) & 0x1F) << 8) | (name_to_id(key, generation) & 0xFF)

    if function in MOD_TAP_BY_NAME:
        return numbering.mt_base | ((MOD_TAP_BY_NAME[function] & 0x1F) << 8) | (name_to_id(args, generation) & 0xFF)

    if function == "TD":
        return QK_TAP_DANCE | (_parse_num(args) & 0xFF)

    raise KeycodeParseError("can't find function {}".format(function))


def id_to_name(code, generation):
    """ Converts a 16-bit keycode to its canonical textual form """

    numbering = NUMBERING[generation]

    if code >> 8 in WRAPPER_BY_HIGH:
        return "{}({})".format(WRAPPER_BY_HIGH[code >> 8], id_to_name(code & 0xFF, generation))

    for layer_function, base, mask in numbering.layer_functions:
        if base <= code <= base + mask:
            return "{}({})".format(layer_function, code & mask)

    lm = numbering.lm
    lm_end = lm.base + (0x10 << lm.layer_shift) - 1
    if lm.base <= code <= lm_end:
        return "LM({},{})".format((code >> lm.layer_shift) & 0xF, mod_to_name(code & lm.mod_mask))

    base, mask = numbering.osm
    if base <= code <= base + mask:
        return "OSM({})".format(mod_to_name(code & mask))

    if QK_LAYER_TAP <= code <= QK_LAYER_TAP + 0xFFF:
        return "LT({},{})".format((code >> 8) & 0xF, id_to_name(code & 0xFF, generation))

    if numbering.mt_base <= code <= numbering.mt_base + 0x1FFF:
        return "MT({},{})".format(mod_to_name((code >> 8) & 0x1F), id_to_name(code & 0xFF, generation))

    if QK_TAP_DANCE <= code <= QK_TAP_DANCE + 0xFF:
        return "TD({})".format(code & 0xFF)

    if code in numbering.names:
        return numbering.names[code]

    if numbering.hex_fallback:
        return "{:#04x}".format(code)
    return "UNKNOWN"


def id_to_short_name(code, generation):
    """ Compact label for display on a key cap """

    numbering = NUMBERING[generation]

    if 0x0200 <= code <= 0x02FF:
        return "L⇧," + id_to_short_name(code & 0xFF, generation)
    if 0x1200 <= code <= 0x12FF:
        return "R⇧," + id_to_short_name(code & 0xFF, generation)

    for layer_function, base, mask in numbering.layer_functions:
        if layer_function in SHORT_LAYER_FUNCTIONS and base <= code <= base + mask:
            return "{},{}".format(layer_function, code & mask)

    if code in numbering.short:
        return numbering.short[code]
    return id_to_name(code, generation)


def normalize(name, generation):
    """ Changes e.g. KC_PERC to LSFT(KC_5) """

    return id_to_name(name_to_id(name, generation), generation)
