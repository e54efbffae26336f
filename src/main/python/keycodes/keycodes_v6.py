# SPDX-License-Identifier: GPL-2.0-or-later
"""
Keycode numbering used by firmware speaking Vial protocol 6 and newer
(QMK keycodes as of the 2022 renumbering).

Ranges encoded as FUNCTION(arg) (mod wrappers, layer switching, mod-tap, ...)
are not listed here; keycodes.py computes those from the bases below.
"""
from types import MappingProxyType

QK_MODS = 0x0100
QK_MOD_TAP = 0x2000
QK_LAYER_TAP = 0x4000
QK_LAYER_MOD = 0x5000
QK_TO = 0x5200
QK_MOMENTARY = 0x5220
QK_DEF_LAYER = 0x5240
QK_TOGGLE_LAYER = 0x5260
QK_ONE_SHOT_LAYER = 0x5280
QK_ONE_SHOT_MOD = 0x52A0
QK_LAYER_TAP_TOGGLE = 0x52C0
QK_PERSISTENT_DEF_LAYER = 0x52E0
QK_TAP_DANCE = 0x5700
QK_MACRO = 0x7700
QK_KB = 0x7E00
QK_USER = 0x7E40

MACRO_COUNT = 128
KB_COUNT = 32
USER_COUNT = 32


# basic keycodes, shared with v5 apart from the mouse block
BASIC = (
    (0x00, "KC_NO"),
    (0x01, "KC_TRANSPARENT"),
    (0x04, "KC_A"), (0x05, "KC_B"), (0x06, "KC_C"), (0x07, "KC_D"), (0x08, "KC_E"), (0x09, "KC_F"),
    (0x0A, "KC_G"), (0x0B, "KC_H"), (0x0C, "KC_I"), (0x0D, "KC_J"), (0x0E, "KC_K"), (0x0F, "KC_L"),
    (0x10, "KC_M"), (0x11, "KC_N"), (0x12, "KC_O"), (0x13, "KC_P"), (0x14, "KC_Q"), (0x15, "KC_R"),
    (0x16, "KC_S"), (0x17, "KC_T"), (0x18, "KC_U"), (0x19, "KC_V"), (0x1A, "KC_W"), (0x1B, "KC_X"),
    (0x1C, "KC_Y"), (0x1D, "KC_Z"),
    (0x1E, "KC_1"), (0x1F, "KC_2"), (0x20, "KC_3"), (0x21, "KC_4"), (0x22, "KC_5"),
    (0x23, "KC_6"), (0x24, "KC_7"), (0x25, "KC_8"), (0x26, "KC_9"), (0x27, "KC_0"),
    (0x28, "KC_ENTER"),
    (0x29, "KC_ESCAPE"),
    (0x2A, "KC_BACKSPACE"),
    (0x2B, "KC_TAB"),
    (0x2C, "KC_SPACE"),
    (0x2D, "KC_MINUS"),
    (0x2E, "KC_EQUAL"),
    (0x2F, "KC_LEFT_BRACKET"),
    (0x30, "KC_RIGHT_BRACKET"),
    (0x31, "KC_BACKSLASH"),
    (0x32, "KC_NONUS_HASH"),
    (0x33, "KC_SEMICOLON"),
    (0x34, "KC_QUOTE"),
    (0x35, "KC_GRAVE"),
    (0x36, "KC_COMMA"),
    (0x37, "KC_DOT"),
    (0x38, "KC_SLASH"),
    (0x39, "KC_CAPS_LOCK"),
    (0x3A, "KC_F1"), (0x3B, "KC_F2"), (0x3C, "KC_F3"), (0x3D, "KC_F4"), (0x3E, "KC_F5"), (0x3F, "KC_F6"),
    (0x40, "KC_F7"), (0x41, "KC_F8"), (0x42, "KC_F9"), (0x43, "KC_F10"), (0x44, "KC_F11"), (0x45, "KC_F12"),
    (0x46, "KC_PRINT_SCREEN"),
    (0x47, "KC_SCROLL_LOCK"),
    (0x48, "KC_PAUSE"),
    (0x49, "KC_INSERT"),
    (0x4A, "KC_HOME"),
    (0x4B, "KC_PAGE_UP"),
    (0x4C, "KC_DELETE"),
    (0x4D, "KC_END"),
    (0x4E, "KC_PAGE_DOWN"),
    (0x4F, "KC_RIGHT"),
    (0x50, "KC_LEFT"),
    (0x51, "KC_DOWN"),
    (0x52, "KC_UP"),
    (0x53, "KC_NUM_LOCK"),
    (0x54, "KC_KP_SLASH"),
    (0x55, "KC_KP_ASTERISK"),
    (0x56, "KC_KP_MINUS"),
    (0x57, "KC_KP_PLUS"),
    (0x58, "KC_KP_ENTER"),
    (0x59, "KC_KP_1"), (0x5A, "KC_KP_2"), (0x5B, "KC_KP_3"), (0x5C, "KC_KP_4"), (0x5D, "KC_KP_5"),
    (0x5E, "KC_KP_6"), (0x5F, "KC_KP_7"), (0x60, "KC_KP_8"), (0x61, "KC_KP_9"), (0x62, "KC_KP_0"),
    (0x63, "KC_KP_DOT"),
    (0x64, "KC_NONUS_BACKSLASH"),
    (0x65, "KC_APPLICATION"),
    (0x66, "KC_KB_POWER"),
    (0x67, "KC_KP_EQUAL"),
    (0x68, "KC_F13"), (0x69, "KC_F14"), (0x6A, "KC_F15"), (0x6B, "KC_F16"), (0x6C, "KC_F17"), (0x6D, "KC_F18"),
    (0x6E, "KC_F19"), (0x6F, "KC_F20"), (0x70, "KC_F21"), (0x71, "KC_F22"), (0x72, "KC_F23"), (0x73, "KC_F24"),
    (0x74, "KC_EXECUTE"),
    (0x75, "KC_HELP"),
    (0x76, "KC_MENU"),
    (0x77, "KC_SELECT"),
    (0x78, "KC_STOP"),
    (0x79, "KC_AGAIN"),
    (0x7A, "KC_UNDO"),
    (0x7B, "KC_CUT"),
    (0x7C, "KC_COPY"),
    (0x7D, "KC_PASTE"),
    (0x7E, "KC_FIND"),
    (0x7F, "KC_KB_MUTE"),
    (0x80, "KC_KB_VOLUME_UP"),
    (0x81, "KC_KB_VOLUME_DOWN"),
    (0x82, "KC_LOCKING_CAPS_LOCK"),
    (0x83, "KC_LOCKING_NUM_LOCK"),
    (0x84, "KC_LOCKING_SCROLL_LOCK"),
    (0x85, "KC_KP_COMMA"),
    (0x86, "KC_KP_EQUAL_AS400"),
    (0x87, "KC_INTERNATIONAL_1"), (0x88, "KC_INTERNATIONAL_2"), (0x89, "KC_INTERNATIONAL_3"),
    (0x8A, "KC_INTERNATIONAL_4"), (0x8B, "KC_INTERNATIONAL_5"), (0x8C, "KC_INTERNATIONAL_6"),
    (0x8D, "KC_INTERNATIONAL_7"), (0x8E, "KC_INTERNATIONAL_8"), (0x8F, "KC_INTERNATIONAL_9"),
    (0x90, "KC_LANGUAGE_1"), (0x91, "KC_LANGUAGE_2"), (0x92, "KC_LANGUAGE_3"),
    (0x93, "KC_LANGUAGE_4"), (0x94, "KC_LANGUAGE_5"), (0x95, "KC_LANGUAGE_6"),
    (0x96, "KC_LANGUAGE_7"), (0x97, "KC_LANGUAGE_8"), (0x98, "KC_LANGUAGE_9"),
    (0x99, "KC_ALTERNATE_ERASE"),
    (0x9A, "KC_SYSTEM_REQUEST"),
    (0x9B, "KC_CANCEL"),
    (0x9C, "KC_CLEAR"),
    (0x9D, "KC_PRIOR"),
    (0x9E, "KC_RETURN"),
    (0x9F, "KC_SEPARATOR"),
    (0xA0, "KC_OUT"),
    (0xA1, "KC_OPER"),
    (0xA2, "KC_CLEAR_AGAIN"),
    (0xA3, "KC_CRSEL"),
    (0xA4, "KC_EXSEL"),
    (0xA5, "KC_SYSTEM_POWER"),
    (0xA6, "KC_SYSTEM_SLEEP"),
    (0xA7, "KC_SYSTEM_WAKE"),
    (0xA8, "KC_AUDIO_MUTE"),
    (0xA9, "KC_AUDIO_VOL_UP"),
    (0xAA, "KC_AUDIO_VOL_DOWN"),
    (0xAB, "KC_MEDIA_NEXT_TRACK"),
    (0xAC, "KC_MEDIA_PREV_TRACK"),
    (0xAD, "KC_MEDIA_STOP"),
    (0xAE, "KC_MEDIA_PLAY_PAUSE"),
    (0xAF, "KC_MEDIA_SELECT"),
    (0xB0, "KC_MEDIA_EJECT"),
    (0xB1, "KC_MAIL"),
    (0xB2, "KC_CALCULATOR"),
    (0xB3, "KC_MY_COMPUTER"),
    (0xB4, "KC_WWW_SEARCH"),
    (0xB5, "KC_WWW_HOME"),
    (0xB6, "KC_WWW_BACK"),
    (0xB7, "KC_WWW_FORWARD"),
    (0xB8, "KC_WWW_STOP"),
    (0xB9, "KC_WWW_REFRESH"),
    (0xBA, "KC_WWW_FAVORITES"),
    (0xBB, "KC_MEDIA_FAST_FORWARD"),
    (0xBC, "KC_MEDIA_REWIND"),
    (0xBD, "KC_BRIGHTNESS_UP"),
    (0xBE, "KC_BRIGHTNESS_DOWN"),
    (0xE0, "KC_LEFT_CTRL"),
    (0xE1, "KC_LEFT_SHIFT"),
    (0xE2, "KC_LEFT_ALT"),
    (0xE3, "KC_LEFT_GUI"),
    (0xE4, "KC_RIGHT_CTRL"),
    (0xE5, "KC_RIGHT_SHIFT"),
    (0xE6, "KC_RIGHT_ALT"),
    (0xE7, "KC_RIGHT_GUI"),
)

MOUSE = (
    (0xCD, "KC_MS_UP"),
    (0xCE, "KC_MS_DOWN"),
    (0xCF, "KC_MS_LEFT"),
    (0xD0, "KC_MS_RIGHT"),
    (0xD1, "KC_MS_BTN1"), (0xD2, "KC_MS_BTN2"), (0xD3, "KC_MS_BTN3"), (0xD4, "KC_MS_BTN4"),
    (0xD5, "KC_MS_BTN5"), (0xD6, "KC_MS_BTN6"), (0xD7, "KC_MS_BTN7"), (0xD8, "KC_MS_BTN8"),
    (0xD9, "KC_MS_WH_UP"),
    (0xDA, "KC_MS_WH_DOWN"),
    (0xDB, "KC_MS_WH_LEFT"),
    (0xDC, "KC_MS_WH_RIGHT"),
    (0xDD, "KC_MS_ACCEL0"),
    (0xDE, "KC_MS_ACCEL1"),
    (0xDF, "KC_MS_ACCEL2"),
)

# short QMK spellings of basic keycodes
BASIC_ALIASES = {
    "XXXXXXX": "KC_NO",
    "KC_TRNS": "KC_TRANSPARENT",
    "_______": "KC_TRANSPARENT",
    "KC_ENT": "KC_ENTER",
    "KC_ESC": "KC_ESCAPE",
    "KC_BSPC": "KC_BACKSPACE",
    "KC_SPC": "KC_SPACE",
    "KC_MINS": "KC_MINUS",
    "KC_EQL": "KC_EQUAL",
    "KC_LBRC": "KC_LEFT_BRACKET",
    "KC_RBRC": "KC_RIGHT_BRACKET",
    "KC_BSLS": "KC_BACKSLASH",
    "KC_NUHS": "KC_NONUS_HASH",
    "KC_SCLN": "KC_SEMICOLON",
    "KC_QUOT": "KC_QUOTE",
    "KC_GRV": "KC_GRAVE",
    "KC_COMM": "KC_COMMA",
    "KC_SLSH": "KC_SLASH",
    "KC_CAPS": "KC_CAPS_LOCK",
    "KC_PSCR": "KC_PRINT_SCREEN",
    "KC_SCRL": "KC_SCROLL_LOCK",
    "KC_PAUS": "KC_PAUSE",
    "KC_INS": "KC_INSERT",
    "KC_PGUP": "KC_PAGE_UP",
    "KC_DEL": "KC_DELETE",
    "KC_PGDN": "KC_PAGE_DOWN",
    "KC_RGHT": "KC_RIGHT",
    "KC_NUM": "KC_NUM_LOCK",
    "KC_PSLS": "KC_KP_SLASH",
    "KC_PAST": "KC_KP_ASTERISK",
    "KC_PMNS": "KC_KP_MINUS",
    "KC_PPLS": "KC_KP_PLUS",
    "KC_PENT": "KC_KP_ENTER",
    "KC_P1": "KC_KP_1", "KC_P2": "KC_KP_2", "KC_P3": "KC_KP_3", "KC_P4": "KC_KP_4", "KC_P5": "KC_KP_5",
    "KC_P6": "KC_KP_6", "KC_P7": "KC_KP_7", "KC_P8": "KC_KP_8", "KC_P9": "KC_KP_9", "KC_P0": "KC_KP_0",
    "KC_PDOT": "KC_KP_DOT",
    "KC_NUBS": "KC_NONUS_BACKSLASH",
    "KC_APP": "KC_APPLICATION",
    "KC_PEQL": "KC_KP_EQUAL",
    "KC_EXEC": "KC_EXECUTE",
    "KC_SLCT": "KC_SELECT",
    "KC_AGIN": "KC_AGAIN",
    "KC_PSTE": "KC_PASTE",
    "KC_INT1": "KC_INTERNATIONAL_1",
    "KC_INT2": "KC_INTERNATIONAL_2",
    "KC_INT3": "KC_INTERNATIONAL_3",
    "KC_LNG1": "KC_LANGUAGE_1",
    "KC_LNG2": "KC_LANGUAGE_2",
    "KC_MUTE": "KC_AUDIO_MUTE",
    "KC_VOLU": "KC_AUDIO_VOL_UP",
    "KC_VOLD": "KC_AUDIO_VOL_DOWN",
    "KC_MNXT": "KC_MEDIA_NEXT_TRACK",
    "KC_MPRV": "KC_MEDIA_PREV_TRACK",
    "KC_MSTP": "KC_MEDIA_STOP",
    "KC_MPLY": "KC_MEDIA_PLAY_PAUSE",
    "KC_MSEL": "KC_MEDIA_SELECT",
    "KC_EJCT": "KC_MEDIA_EJECT",
    "KC_CALC": "KC_CALCULATOR",
    "KC_MYCM": "KC_MY_COMPUTER",
    "KC_WSCH": "KC_WWW_SEARCH",
    "KC_WHOM": "KC_WWW_HOME",
    "KC_WBAK": "KC_WWW_BACK",
    "KC_WFWD": "KC_WWW_FORWARD",
    "KC_WSTP": "KC_WWW_STOP",
    "KC_WREF": "KC_WWW_REFRESH",
    "KC_WFAV": "KC_WWW_FAVORITES",
    "KC_MFFD": "KC_MEDIA_FAST_FORWARD",
    "KC_MRWD": "KC_MEDIA_REWIND",
    "KC_BRIU": "KC_BRIGHTNESS_UP",
    "KC_BRID": "KC_BRIGHTNESS_DOWN",
    "KC_PWR": "KC_SYSTEM_POWER",
    "KC_SLEP": "KC_SYSTEM_SLEEP",
    "KC_WAKE": "KC_SYSTEM_WAKE",
    "KC_LCTL": "KC_LEFT_CTRL",
    "KC_LSFT": "KC_LEFT_SHIFT",
    "KC_LALT": "KC_LEFT_ALT",
    "KC_LOPT": "KC_LEFT_ALT",
    "KC_LGUI": "KC_LEFT_GUI",
    "KC_LCMD": "KC_LEFT_GUI",
    "KC_LWIN": "KC_LEFT_GUI",
    "KC_RCTL": "KC_RIGHT_CTRL",
    "KC_RSFT": "KC_RIGHT_SHIFT",
    "KC_RALT": "KC_RIGHT_ALT",
    "KC_ROPT": "KC_RIGHT_ALT",
    "KC_ALGR": "KC_RIGHT_ALT",
    "KC_RGUI": "KC_RIGHT_GUI",
    "KC_RCMD": "KC_RIGHT_GUI",
    "KC_RWIN": "KC_RIGHT_GUI",
    "KC_MS_U": "KC_MS_UP",
    "KC_MS_D": "KC_MS_DOWN",
    "KC_MS_L": "KC_MS_LEFT",
    "KC_MS_R": "KC_MS_RIGHT",
    "KC_BTN1": "KC_MS_BTN1",
    "KC_BTN2": "KC_MS_BTN2",
    "KC_BTN3": "KC_MS_BTN3",
    "KC_BTN4": "KC_MS_BTN4",
    "KC_BTN5": "KC_MS_BTN5",
    "KC_WH_U": "KC_MS_WH_UP",
    "KC_WH_D": "KC_MS_WH_DOWN",
    "KC_WH_L": "KC_MS_WH_LEFT",
    "KC_WH_R": "KC_MS_WH_RIGHT",
    "KC_ACL0": "KC_MS_ACCEL0",
    "KC_ACL1": "KC_MS_ACCEL1",
    "KC_ACL2": "KC_MS_ACCEL2",
}

# shifted symbols, LSFT(kc)
SHIFTED = {
    "KC_TILDE": 0x35, "KC_TILD": 0x35,
    "KC_EXCLAIM": 0x1E, "KC_EXLM": 0x1E,
    "KC_AT": 0x1F,
    "KC_HASH": 0x20,
    "KC_DOLLAR": 0x21, "KC_DLR": 0x21,
    "KC_PERCENT": 0x22, "KC_PERC": 0x22,
    "KC_CIRCUMFLEX": 0x23, "KC_CIRC": 0x23,
    "KC_AMPERSAND": 0x24, "KC_AMPR": 0x24,
    "KC_ASTERISK": 0x25, "KC_ASTR": 0x25,
    "KC_LEFT_PAREN": 0x26, "KC_LPRN": 0x26,
    "KC_RIGHT_PAREN": 0x27, "KC_RPRN": 0x27,
    "KC_UNDERSCORE": 0x2D, "KC_UNDS": 0x2D,
    "KC_PLUS": 0x2E,
    "KC_LEFT_CURLY_BRACE": 0x2F, "KC_LCBR": 0x2F,
    "KC_RIGHT_CURLY_BRACE": 0x30, "KC_RCBR": 0x30,
    "KC_PIPE": 0x31,
    "KC_COLON": 0x33, "KC_COLN": 0x33,
    "KC_DOUBLE_QUOTE": 0x34, "KC_DQUO": 0x34, "KC_DQT": 0x34,
    "KC_LEFT_ANGLE_BRACKET": 0x36, "KC_LABK": 0x36, "KC_LT": 0x36,
    "KC_RIGHT_ANGLE_BRACKET": 0x37, "KC_RABK": 0x37, "KC_GT": 0x37,
    "KC_QUESTION": 0x38, "KC_QUES": 0x38,
}

QUANTUM = (
    (0x7000, "QK_MAGIC_SWAP_CONTROL_CAPS_LOCK"),
    (0x7001, "QK_MAGIC_UNSWAP_CONTROL_CAPS_LOCK"),
    (0x7002, "QK_MAGIC_TOGGLE_CONTROL_CAPS_LOCK"),
    (0x7003, "QK_MAGIC_CAPS_LOCK_AS_CONTROL_OFF"),
    (0x7004, "QK_MAGIC_CAPS_LOCK_AS_CONTROL_ON"),
    (0x7005, "QK_MAGIC_SWAP_LALT_LGUI"),
    (0x7006, "QK_MAGIC_UNSWAP_LALT_LGUI"),
    (0x7007, "QK_MAGIC_SWAP_RALT_RGUI"),
    (0x7008, "QK_MAGIC_UNSWAP_RALT_RGUI"),
    (0x7009, "QK_MAGIC_GUI_ON"),
    (0x700A, "QK_MAGIC_GUI_OFF"),
    (0x700B, "QK_MAGIC_TOGGLE_GUI"),
    (0x700C, "QK_MAGIC_SWAP_GRAVE_ESC"),
    (0x700D, "QK_MAGIC_UNSWAP_GRAVE_ESC"),
    (0x700E, "QK_MAGIC_SWAP_BACKSLASH_BACKSPACE"),
    (0x700F, "QK_MAGIC_UNSWAP_BACKSLASH_BACKSPACE"),
    (0x7010, "QK_MAGIC_TOGGLE_BACKSLASH_BACKSPACE"),
    (0x7011, "QK_MAGIC_NKRO_ON"),
    (0x7012, "QK_MAGIC_NKRO_OFF"),
    (0x7013, "QK_MAGIC_TOGGLE_NKRO"),
    (0x7014, "QK_MAGIC_SWAP_ALT_GUI"),
    (0x7015, "QK_MAGIC_UNSWAP_ALT_GUI"),
    (0x7016, "QK_MAGIC_TOGGLE_ALT_GUI"),
    (0x7017, "QK_MAGIC_SWAP_LCTL_LGUI"),
    (0x7018, "QK_MAGIC_UNSWAP_LCTL_LGUI"),
    (0x7019, "QK_MAGIC_SWAP_RCTL_RGUI"),
    (0x701A, "QK_MAGIC_UNSWAP_RCTL_RGUI"),
    (0x701B, "QK_MAGIC_SWAP_CTL_GUI"),
    (0x701C, "QK_MAGIC_UNSWAP_CTL_GUI"),
    (0x701D, "QK_MAGIC_TOGGLE_CTL_GUI"),
    (0x701E, "QK_MAGIC_EE_HANDS_LEFT"),
    (0x701F, "QK_MAGIC_EE_HANDS_RIGHT"),
    (0x7800, "QK_BACKLIGHT_ON"),
    (0x7801, "QK_BACKLIGHT_OFF"),
    (0x7802, "QK_BACKLIGHT_TOGGLE"),
    (0x7803, "QK_BACKLIGHT_DOWN"),
    (0x7804, "QK_BACKLIGHT_UP"),
    (0x7805, "QK_BACKLIGHT_STEP"),
    (0x7806, "QK_BACKLIGHT_TOGGLE_BREATHING"),
    (0x7820, "RGB_TOG"),
    (0x7821, "RGB_MODE_FORWARD"),
    (0x7822, "RGB_MODE_REVERSE"),
    (0x7823, "RGB_HUI"),
    (0x7824, "RGB_HUD"),
    (0x7825, "RGB_SAI"),
    (0x7826, "RGB_SAD"),
    (0x7827, "RGB_VAI"),
    (0x7828, "RGB_VAD"),
    (0x7829, "RGB_SPI"),
    (0x782A, "RGB_SPD"),
    (0x782B, "RGB_MODE_PLAIN"),
    (0x782C, "RGB_MODE_BREATHE"),
    (0x782D, "RGB_MODE_RAINBOW"),
    (0x782E, "RGB_MODE_SWIRL"),
    (0x782F, "RGB_MODE_SNAKE"),
    (0x7830, "RGB_MODE_KNIGHT"),
    (0x7831, "RGB_MODE_XMAS"),
    (0x7832, "RGB_MODE_GRADIENT"),
    (0x7833, "RGB_MODE_RGBTEST"),
    (0x7C00, "QK_BOOT"),
    (0x7C01, "QK_REBOOT"),
    (0x7C02, "QK_DEBUG_TOGGLE"),
    (0x7C03, "QK_CLEAR_EEPROM"),
    (0x7C04, "QK_MAKE"),
    (0x7C10, "QK_AUTO_SHIFT_DOWN"),
    (0x7C11, "QK_AUTO_SHIFT_UP"),
    (0x7C12, "QK_AUTO_SHIFT_REPORT"),
    (0x7C13, "QK_AUTO_SHIFT_ON"),
    (0x7C14, "QK_AUTO_SHIFT_OFF"),
    (0x7C15, "QK_AUTO_SHIFT_TOGGLE"),
    (0x7C16, "QK_GRAVE_ESCAPE"),
    (0x7C17, "QK_VELOCIKEY_TOGGLE"),
    (0x7C18, "QK_SPACE_CADET_LEFT_CTRL_PARENTHESIS_OPEN"),
    (0x7C19, "QK_SPACE_CADET_RIGHT_CTRL_PARENTHESIS_CLOSE"),
    (0x7C1A, "QK_SPACE_CADET_LEFT_SHIFT_PARENTHESIS_OPEN"),
    (0x7C1B, "QK_SPACE_CADET_RIGHT_SHIFT_PARENTHESIS_CLOSE"),
    (0x7C1C, "QK_SPACE_CADET_LEFT_ALT_PARENTHESIS_OPEN"),
    (0x7C1D, "QK_SPACE_CADET_RIGHT_ALT_PARENTHESIS_CLOSE"),
    (0x7C1E, "QK_SPACE_CADET_RIGHT_SHIFT_ENTER"),
    (0x7C50, "QK_COMBO_ON"),
    (0x7C51, "QK_COMBO_OFF"),
    (0x7C52, "QK_COMBO_TOGGLE"),
    (0x7C53, "QK_DYNAMIC_MACRO_RECORD_START_1"),
    (0x7C54, "QK_DYNAMIC_MACRO_RECORD_START_2"),
    (0x7C55, "QK_DYNAMIC_MACRO_RECORD_STOP"),
    (0x7C56, "QK_DYNAMIC_MACRO_PLAY_1"),
    (0x7C57, "QK_DYNAMIC_MACRO_PLAY_2"),
    (0x7C58, "QK_LEADER"),
    (0x7C59, "QK_LOCK"),
    (0x7C5A, "QK_ONE_SHOT_ON"),
    (0x7C5B, "QK_ONE_SHOT_OFF"),
    (0x7C5C, "QK_ONE_SHOT_TOGGLE"),
    (0x7C5D, "QK_KEY_OVERRIDE_TOGGLE"),
    (0x7C5E, "QK_KEY_OVERRIDE_ON"),
    (0x7C5F, "QK_KEY_OVERRIDE_OFF"),
    (0x7C60, "QK_SECURE_LOCK"),
    (0x7C61, "QK_SECURE_UNLOCK"),
    (0x7C62, "QK_SECURE_TOGGLE"),
    (0x7C63, "QK_SECURE_REQUEST"),
    (0x7C70, "QK_DYNAMIC_TAPPING_TERM_PRINT"),
    (0x7C71, "QK_DYNAMIC_TAPPING_TERM_UP"),
    (0x7C72, "QK_DYNAMIC_TAPPING_TERM_DOWN"),
    (0x7C73, "QK_CAPS_WORD_TOGGLE"),
    (0x7C74, "QK_AUTOCORRECT_ON"),
    (0x7C75, "QK_AUTOCORRECT_OFF"),
    (0x7C76, "QK_AUTOCORRECT_TOGGLE"),
    (0x7C77, "QK_TRI_LAYER_LOWER"),
    (0x7C78, "QK_TRI_LAYER_UPPER"),
    (0x7C79, "QK_REPEAT_KEY"),
    (0x7C7A, "QK_ALT_REPEAT_KEY"),
    (0x7C7B, "QK_LAYER_LOCK"),
)

QUANTUM_ALIASES = {
    "QK_GESC": "QK_GRAVE_ESCAPE",
    "QK_RBT": "QK_REBOOT",
    "QK_DEBUG": "QK_DEBUG_TOGGLE",
    "QK_DBG": "QK_DEBUG_TOGGLE",
    "EE_CLR": "QK_CLEAR_EEPROM",
    "QK_BOOTLOADER": "QK_BOOT",
    "RESET": "QK_BOOT",
    "NK_ON": "QK_MAGIC_NKRO_ON",
    "NK_OFF": "QK_MAGIC_NKRO_OFF",
    "NK_TOGG": "QK_MAGIC_TOGGLE_NKRO",
    "BL_ON": "QK_BACKLIGHT_ON",
    "BL_OFF": "QK_BACKLIGHT_OFF",
    "BL_TOGG": "QK_BACKLIGHT_TOGGLE",
    "BL_DOWN": "QK_BACKLIGHT_DOWN",
    "BL_UP": "QK_BACKLIGHT_UP",
    "BL_STEP": "QK_BACKLIGHT_STEP",
    "BL_BRTG": "QK_BACKLIGHT_TOGGLE_BREATHING",
    "RGB_MOD": "RGB_MODE_FORWARD",
    "RGB_RMOD": "RGB_MODE_REVERSE",
    "RGB_M_P": "RGB_MODE_PLAIN",
    "RGB_M_B": "RGB_MODE_BREATHE",
    "RGB_M_R": "RGB_MODE_RAINBOW",
    "RGB_M_SW": "RGB_MODE_SWIRL",
    "RGB_M_SN": "RGB_MODE_SNAKE",
    "RGB_M_K": "RGB_MODE_KNIGHT",
    "RGB_M_X": "RGB_MODE_XMAS",
    "RGB_M_G": "RGB_MODE_GRADIENT",
    "RGB_M_T": "RGB_MODE_RGBTEST",
    "SC_LCPO": "QK_SPACE_CADET_LEFT_CTRL_PARENTHESIS_OPEN",
    "SC_RCPC": "QK_SPACE_CADET_RIGHT_CTRL_PARENTHESIS_CLOSE",
    "SC_LSPO": "QK_SPACE_CADET_LEFT_SHIFT_PARENTHESIS_OPEN",
    "SC_RSPC": "QK_SPACE_CADET_RIGHT_SHIFT_PARENTHESIS_CLOSE",
    "SC_LAPO": "QK_SPACE_CADET_LEFT_ALT_PARENTHESIS_OPEN",
    "SC_RAPC": "QK_SPACE_CADET_RIGHT_ALT_PARENTHESIS_CLOSE",
    "SC_SENT": "QK_SPACE_CADET_RIGHT_SHIFT_ENTER",
    "CW_TOGG": "QK_CAPS_WORD_TOGGLE",
    "FN_MO13": "QK_TRI_LAYER_LOWER",
    "FN_MO23": "QK_TRI_LAYER_UPPER",
    "TL_LOWR": "QK_TRI_LAYER_LOWER",
    "TL_UPPR": "QK_TRI_LAYER_UPPER",
    "QK_REP": "QK_REPEAT_KEY",
    "QK_AREP": "QK_ALT_REPEAT_KEY",
    "QK_LLCK": "QK_LAYER_LOCK",
    "QK_LEAD": "QK_LEADER",
    "DM_REC1": "QK_DYNAMIC_MACRO_RECORD_START_1",
    "DM_REC2": "QK_DYNAMIC_MACRO_RECORD_START_2",
    "DM_RSTP": "QK_DYNAMIC_MACRO_RECORD_STOP",
    "DM_PLY1": "QK_DYNAMIC_MACRO_PLAY_1",
    "DM_PLY2": "QK_DYNAMIC_MACRO_PLAY_2",
}

SHORT = {
    "KC_NO": "",
    "KC_TRANSPARENT": "▽",
    "KC_ENTER": "Enter",
    "KC_ESCAPE": "Esc",
    "KC_BACKSPACE": "Bksp",
    "KC_TAB": "Tab",
    "KC_SPACE": "Space",
    "KC_MINUS": "-",
    "KC_EQUAL": "=",
    "KC_LEFT_BRACKET": "[",
    "KC_RIGHT_BRACKET": "]",
    "KC_BACKSLASH": "\\",
    "KC_SEMICOLON": ";",
    "KC_QUOTE": "'",
    "KC_GRAVE": "`",
    "KC_COMMA": ",",
    "KC_DOT": ".",
    "KC_SLASH": "/",
    "KC_CAPS_LOCK": "Caps",
    "KC_PRINT_SCREEN": "PrtSc",
    "KC_INSERT": "Ins",
    "KC_HOME": "Home",
    "KC_PAGE_UP": "PgUp",
    "KC_DELETE": "Del",
    "KC_END": "End",
    "KC_PAGE_DOWN": "PgDn",
    "KC_RIGHT": "→",
    "KC_LEFT": "←",
    "KC_DOWN": "↓",
    "KC_UP": "↑",
    "KC_LEFT_CTRL": "LCtl",
    "KC_LEFT_SHIFT": "L⇧",
    "KC_LEFT_ALT": "LAlt",
    "KC_LEFT_GUI": "LGui",
    "KC_RIGHT_CTRL": "RCtl",
    "KC_RIGHT_SHIFT": "R⇧",
    "KC_RIGHT_ALT": "RAlt",
    "KC_RIGHT_GUI": "RGui",
    "QK_TRI_LAYER_LOWER": "Fn1,Fn3",
    "QK_TRI_LAYER_UPPER": "Fn2,Fn3",
    "QK_BOOT": "Boot",
}


def build_names(*groups):
    names = {}
    for group in groups:
        for code, name in group:
            names[code] = name
    return names


def build_short(names):
    short = {}
    canonical = {name: code for code, name in names.items()}
    for code, name in names.items():
        if name.startswith("KC_") and len(name) == 4:
            # letters and digits
            short[code] = name[3:]
        elif name.startswith("KC_F") and name[4:].isdigit():
            short[code] = name[3:]
    for name, label in SHORT.items():
        if name in canonical:
            short[canonical[name]] = label
    return short


def build_kc(names, aliases, shifted, mods_shift):
    kc = {name: code for code, name in names.items()}
    for alias, target in aliases.items():
        kc[alias] = kc[target]
    for alias, code in shifted.items():
        kc[alias] = mods_shift | code
    return kc


def numbered(prefix, base, count):
    return tuple((base + x, "{}{}".format(prefix, x)) for x in range(count))


class keycodes_v6:

    names = MappingProxyType(build_names(
        BASIC, MOUSE, QUANTUM,
        numbered("QK_MACRO_", QK_MACRO, MACRO_COUNT),
        numbered("QK_KB_", QK_KB, KB_COUNT),
        numbered("QK_USER_", QK_USER, USER_COUNT),
    ))
    kc = MappingProxyType(build_kc(
        names,
        dict(BASIC_ALIASES, **QUANTUM_ALIASES, **{"M{}".format(x): "QK_MACRO_{}".format(x)
                                                   for x in range(MACRO_COUNT)}),
        SHIFTED,
        0x0200,
    ))
    short = MappingProxyType(build_short(names))
