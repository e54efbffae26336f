import unittest

from keycodes.keycodes import Generation, name_to_id, id_to_name, id_to_short_name, normalize, \
    name_to_mod, mod_to_name, name_to_bitmod, bitmod_to_name
from protocol.errors import KeycodeParseError, ParseError

CURRENT = Generation.CURRENT
LEGACY = Generation.LEGACY


class TestKeycode(unittest.TestCase):

    def assert_both_ways(self, code, name, generation):
        self.assertEqual(name_to_id(name, generation), code, name)
        self.assertEqual(id_to_name(code, generation), name, hex(code))

    def test_generation_from_vial_version(self):
        self.assertEqual(Generation.from_vial_version(0), LEGACY)
        self.assertEqual(Generation.from_vial_version(5), LEGACY)
        self.assertEqual(Generation.from_vial_version(6), CURRENT)
        self.assertEqual(Generation.from_vial_version(9), CURRENT)

    def test_current_vectors(self):
        """ Tests the well known values of the current numbering """
        self.assert_both_ways(0x3228, "MT(MOD_RSFT,KC_ENTER)", CURRENT)
        self.assert_both_ways(0x7C77, "QK_TRI_LAYER_LOWER", CURRENT)
        self.assert_both_ways(0x7C78, "QK_TRI_LAYER_UPPER", CURRENT)
        self.assert_both_ways(0x770A, "QK_MACRO_10", CURRENT)
        self.assert_both_ways(0x7013, "QK_MAGIC_TOGGLE_NKRO", CURRENT)

    def test_legacy_vectors(self):
        """ Tests that the same names resolve to the legacy numbering """
        self.assert_both_ways(0x7228, "MT(MOD_RSFT,KC_ENTER)", LEGACY)
        self.assert_both_ways(0x5F10, "QK_TRI_LAYER_LOWER", LEGACY)
        self.assert_both_ways(0x5F11, "QK_TRI_LAYER_UPPER", LEGACY)
        self.assert_both_ways(0x5F1C, "QK_MACRO_10", LEGACY)
        self.assert_both_ways(0x5C14, "QK_MAGIC_TOGGLE_NKRO", LEGACY)

    def test_aliases(self):
        self.assertEqual(name_to_id("KC_ENT", CURRENT), 0x28)
        self.assertEqual(name_to_id("KC_ESC", CURRENT), 0x29)
        self.assertEqual(name_to_id("KC_TRNS", CURRENT), 0x01)
        self.assertEqual(name_to_id("M10", CURRENT), 0x770A)
        self.assertEqual(name_to_id("KC_PERC", CURRENT), 0x0222)
        self.assertEqual(normalize("KC_PERC", CURRENT), "LSFT(KC_5)")

    def test_mouse_block_moved(self):
        """ Tests that the mouse keys sit at different places in the two numberings """
        self.assertEqual(name_to_id("KC_MS_U", CURRENT), 0xCD)
        self.assertEqual(name_to_id("KC_MS_U", LEGACY), 0xF0)

    def test_spaces_ignored(self):
        self.assertEqual(name_to_id(" MT( MOD_LCTL , KC_A ) ", CURRENT), 0x2104)

    def test_wrappers(self):
        self.assert_both_ways(0x0104, "LCTL(KC_A)", CURRENT)
        self.assert_both_ways(0x1205, "RSFT(KC_B)", CURRENT)
        self.assert_both_ways(0x0F29, "HYPR(KC_ESCAPE)", CURRENT)
        self.assert_both_ways(0x0704, "MEH(KC_A)", LEGACY)
        self.assertEqual(name_to_id("C(KC_A)", CURRENT), 0x0104)
        self.assertEqual(name_to_id("LCMD(KC_A)", CURRENT), 0x0804)
        self.assertEqual(name_to_id("SGUI(KC_A)", CURRENT), 0x0A04)
        self.assertEqual(name_to_id("LCTL(LSFT(KC_A))", CURRENT), 0x0304)

    def test_layer_functions_current(self):
        self.assert_both_ways(0x5203, "TO(3)", CURRENT)
        self.assert_both_ways(0x5221, "MO(1)", CURRENT)
        self.assert_both_ways(0x5242, "DF(2)", CURRENT)
        self.assert_both_ways(0x52E1, "PDF(1)", CURRENT)
        self.assert_both_ways(0x5264, "TG(4)", CURRENT)
        self.assert_both_ways(0x5285, "OSL(5)", CURRENT)
        self.assert_both_ways(0x52C6, "TT(6)", CURRENT)

    def test_layer_functions_legacy(self):
        self.assert_both_ways(0x5013, "TO(3)", LEGACY)
        self.assert_both_ways(0x5101, "MO(1)", LEGACY)
        self.assert_both_ways(0x5202, "DF(2)", LEGACY)
        self.assert_both_ways(0x5304, "TG(4)", LEGACY)
        self.assert_both_ways(0x5405, "OSL(5)", LEGACY)
        self.assert_both_ways(0x5806, "TT(6)", LEGACY)

    def test_pdf_is_current_only(self):
        with self.assertRaises(KeycodeParseError):
            name_to_id("PDF(1)", LEGACY)

    def test_composite_forms(self):
        self.assert_both_ways(0x52A2, "OSM(MOD_LSFT)", CURRENT)
        self.assert_both_ways(0x5502, "OSM(MOD_LSFT)", LEGACY)
        self.assert_both_ways(0x5021, "LM(1,MOD_LCTL)", CURRENT)
        self.assert_both_ways(0x5911, "LM(1,MOD_LCTL)", LEGACY)
        self.assert_both_ways(0x4204, "LT(2,KC_A)", CURRENT)
        self.assert_both_ways(0x4204, "LT(2,KC_A)", LEGACY)
        self.assert_both_ways(0x5705, "TD(5)", CURRENT)
        self.assert_both_ways(0x2304, "MT(MOD_LCTL|MOD_LSFT,KC_A)", CURRENT)

    def test_mod_tap_aliases(self):
        self.assertEqual(name_to_id("LCTL_T(KC_A)", CURRENT), 0x2104)
        self.assertEqual(name_to_id("CTL_T(KC_A)", LEGACY), 0x6104)
        self.assertEqual(name_to_id("RSFT_T(KC_ENTER)", CURRENT), 0x3228)
        self.assertEqual(name_to_id("HYPR_T(KC_A)", CURRENT), 0x2F04)
        self.assertEqual(name_to_id("MEH_T(KC_A)", CURRENT), 0x2704)

    def test_unknown_fallback(self):
        """ Tests that current numbering falls back to hex while legacy gives up """
        self.assertEqual(id_to_name(0x5F00, CURRENT), "0x5f00")
        self.assertEqual(name_to_id("0x5f00", CURRENT), 0x5F00)
        self.assertEqual(id_to_name(0xFFFF, LEGACY), "UNKNOWN")
        with self.assertRaises(KeycodeParseError):
            name_to_id("0x10", LEGACY)

    def test_errors(self):
        for name in ["KC_NOPE", "FOO(KC_A)", "MO(x)", "MO(1", "LT(1KC_A)", "LM(1)", "TD(a)",
                     "OSM(MOD_FOO)", "0x10000", "0xZZ"]:
            with self.assertRaises(KeycodeParseError, msg=name):
                name_to_id(name, CURRENT)

    def test_parse_error_is_value_error(self):
        with self.assertRaises(ValueError):
            name_to_id("KC_NOPE", CURRENT)
        self.assertTrue(issubclass(KeycodeParseError, ParseError))

    def test_short_names(self):
        self.assertEqual(id_to_short_name(0x0204, CURRENT), "L⇧,A")
        self.assertEqual(id_to_short_name(0x1204, CURRENT), "R⇧,A")
        self.assertEqual(id_to_short_name(0x5221, CURRENT), "MO,1")
        self.assertEqual(id_to_short_name(0x5101, LEGACY), "MO,1")
        self.assertEqual(id_to_short_name(0x7C77, CURRENT), "Fn1,Fn3")
        self.assertEqual(id_to_short_name(0x5F10, LEGACY), "Fn1,Fn3")
        self.assertEqual(id_to_short_name(0x29, CURRENT), "Esc")
        self.assertEqual(id_to_short_name(0x5705, CURRENT), "TD(5)")

    def test_mods(self):
        self.assertEqual(name_to_mod("MOD_LCTL|MOD_LSFT"), 0x03)
        self.assertEqual(name_to_mod("RALT"), 0x14)
        self.assertEqual(mod_to_name(0x03), "MOD_LCTL|MOD_LSFT")
        self.assertEqual(mod_to_name(0x12), "MOD_RSFT")
        self.assertEqual(mod_to_name(0), "KC_NO")
        with self.assertRaises(KeycodeParseError):
            name_to_mod("MOD_LCTL|FOO")

    def test_bitmods(self):
        self.assertEqual(name_to_bitmod("LCTL|RSFT"), 0x21)
        self.assertEqual(name_to_bitmod("MOD_BIT_LCTRL|LC|C"), 0x01)
        self.assertEqual(bitmod_to_name(0x21), "MOD_BIT_LCTRL|MOD_BIT_RSHIFT")
        self.assertEqual(bitmod_to_name(0x90), "MOD_BIT_RCTRL|MOD_BIT_RGUI")
        self.assertEqual(bitmod_to_name(0), "KC_NO")
        with self.assertRaises(KeycodeParseError):
            name_to_bitmod("MOD_BIT_FOO")

    def test_current_numbering_is_complete(self):
        """ Tests that every 16-bit value has a printable form that parses back """
        for code in range(2 ** 16):
            name = id_to_name(code, CURRENT)
            if name.startswith(("LM(", "MT(", "OSM(")) and "KC_NO" in name:
                # empty mod sets print as KC_NO, which is not a mod token
                continue
            self.assertEqual(name_to_id(name, CURRENT), code, "{} printed as {}".format(hex(code), name))
