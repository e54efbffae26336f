# SPDX-License-Identifier: GPL-2.0-or-later
"""
Keycode numbering used by firmware speaking Vial protocol 5 and older.

Basic keycodes match the current numbering except for the mouse block,
which lives at 0xF0.
"""
from types import MappingProxyType

from keycodes.keycodes_v6 import BASIC, BASIC_ALIASES, SHIFTED, build_names, build_kc, build_short, numbered

QK_MODS = 0x0100
QK_MOD_TAP = 0x6000
QK_LAYER_TAP = 0x4000
QK_TO = 0x5010
QK_MOMENTARY = 0x5100
QK_DEF_LAYER = 0x5200
QK_TOGGLE_LAYER = 0x5300
QK_ONE_SHOT_LAYER = 0x5400
QK_ONE_SHOT_MOD = 0x5500
QK_TAP_DANCE = 0x5700
QK_LAYER_TAP_TOGGLE = 0x5800
QK_LAYER_MOD = 0x5900
QK_MACRO = 0x5F12
QK_KB = 0x5F80

# macros run up to the start of the keyboard-specific block
MACRO_COUNT = QK_KB - QK_MACRO
KB_COUNT = 16

MOUSE = (
    (0xF0, "KC_MS_UP"),
    (0xF1, "KC_MS_DOWN"),
    (0xF2, "KC_MS_LEFT"),
    (0xF3, "KC_MS_RIGHT"),
    (0xF4, "KC_MS_BTN1"), (0xF5, "KC_MS_BTN2"), (0xF6, "KC_MS_BTN3"), (0xF7, "KC_MS_BTN4"),
    (0xF8, "KC_MS_BTN5"),
    (0xF9, "KC_MS_WH_UP"),
    (0xFA, "KC_MS_WH_DOWN"),
    (0xFB, "KC_MS_WH_LEFT"),
    (0xFC, "KC_MS_WH_RIGHT"),
    (0xFD, "KC_MS_ACCEL0"),
    (0xFE, "KC_MS_ACCEL1"),
    (0xFF, "KC_MS_ACCEL2"),
)

QUANTUM = (
    (0x5C00, "QK_BOOT"),
    (0x5C01, "QK_DEBUG_TOGGLE"),
    (0x5C02, "QK_MAGIC_SWAP_CONTROL_CAPS_LOCK"),
    (0x5C03, "QK_MAGIC_CAPS_LOCK_AS_CONTROL_ON"),
    (0x5C04, "QK_MAGIC_SWAP_LALT_LGUI"),
    (0x5C05, "QK_MAGIC_SWAP_RALT_RGUI"),
    (0x5C06, "QK_MAGIC_GUI_OFF"),
    (0x5C07, "QK_MAGIC_SWAP_GRAVE_ESC"),
    (0x5C08, "QK_MAGIC_SWAP_BACKSLASH_BACKSPACE"),
    (0x5C09, "QK_MAGIC_NKRO_ON"),
    (0x5C0A, "QK_MAGIC_SWAP_ALT_GUI"),
    (0x5C0B, "QK_MAGIC_UNSWAP_CONTROL_CAPS_LOCK"),
    (0x5C0C, "QK_MAGIC_CAPS_LOCK_AS_CONTROL_OFF"),
    (0x5C0D, "QK_MAGIC_UNSWAP_LALT_LGUI"),
    (0x5C0E, "QK_MAGIC_UNSWAP_RALT_RGUI"),
    (0x5C0F, "QK_MAGIC_GUI_ON"),
    (0x5C10, "QK_MAGIC_UNSWAP_GRAVE_ESC"),
    (0x5C11, "QK_MAGIC_UNSWAP_BACKSLASH_BACKSPACE"),
    (0x5C12, "QK_MAGIC_NKRO_OFF"),
    (0x5C13, "QK_MAGIC_UNSWAP_ALT_GUI"),
    (0x5C14, "QK_MAGIC_TOGGLE_NKRO"),
    (0x5C16, "QK_GRAVE_ESCAPE"),
    (0x5CBB, "QK_BACKLIGHT_ON"),
    (0x5CBC, "QK_BACKLIGHT_OFF"),
    (0x5CBD, "QK_BACKLIGHT_DOWN"),
    (0x5CBE, "QK_BACKLIGHT_UP"),
    (0x5CBF, "QK_BACKLIGHT_TOGGLE"),
    (0x5CC0, "QK_BACKLIGHT_STEP"),
    (0x5CC1, "QK_BACKLIGHT_TOGGLE_BREATHING"),
    (0x5CC2, "RGB_TOG"),
    (0x5CC3, "RGB_MODE_FORWARD"),
    (0x5CC4, "RGB_MODE_REVERSE"),
    (0x5CC5, "RGB_HUI"),
    (0x5CC6, "RGB_HUD"),
    (0x5CC7, "RGB_SAI"),
    (0x5CC8, "RGB_SAD"),
    (0x5CC9, "RGB_VAI"),
    (0x5CCA, "RGB_VAD"),
    (0x5CCB, "RGB_SPI"),
    (0x5CCC, "RGB_SPD"),
    (0x5F10, "QK_TRI_LAYER_LOWER"),
    (0x5F11, "QK_TRI_LAYER_UPPER"),
)

QUANTUM_ALIASES = {
    "RESET": "QK_BOOT",
    "QK_BOOTLOADER": "QK_BOOT",
    "DEBUG": "QK_DEBUG_TOGGLE",
    "QK_GESC": "QK_GRAVE_ESCAPE",
    "KC_GESC": "QK_GRAVE_ESCAPE",
    "MAGIC_HOST_NKRO": "QK_MAGIC_NKRO_ON",
    "MAGIC_UNHOST_NKRO": "QK_MAGIC_NKRO_OFF",
    "MAGIC_TOGGLE_NKRO": "QK_MAGIC_TOGGLE_NKRO",
    "NK_TOGG": "QK_MAGIC_TOGGLE_NKRO",
    "BL_ON": "QK_BACKLIGHT_ON",
    "BL_OFF": "QK_BACKLIGHT_OFF",
    "BL_DEC": "QK_BACKLIGHT_DOWN",
    "BL_INC": "QK_BACKLIGHT_UP",
    "BL_TOGG": "QK_BACKLIGHT_TOGGLE",
    "BL_STEP": "QK_BACKLIGHT_STEP",
    "BL_BRTG": "QK_BACKLIGHT_TOGGLE_BREATHING",
    "RGB_MOD": "RGB_MODE_FORWARD",
    "RGB_RMOD": "RGB_MODE_REVERSE",
    "FN_MO13": "QK_TRI_LAYER_LOWER",
    "FN_MO23": "QK_TRI_LAYER_UPPER",
}


class keycodes_v5:

    names = MappingProxyType(build_names(
        BASIC, MOUSE, QUANTUM,
        numbered("QK_MACRO_", QK_MACRO, MACRO_COUNT),
        numbered("QK_KB_", QK_KB, KB_COUNT),
    ))
    kc = MappingProxyType(build_kc(
        names,
        dict(BASIC_ALIASES, **QUANTUM_ALIASES,
             **{"M{}".format(x): "QK_MACRO_{}".format(x) for x in range(MACRO_COUNT)},
             **{"USER{:02}".format(x): "QK_KB_{}".format(x) for x in range(KB_COUNT)}),
        SHIFTED,
        0x0200,
    ))
    short = MappingProxyType(build_short(names))
