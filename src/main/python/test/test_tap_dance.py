import struct

import pytest

from keycodes.keycodes import Generation, name_to_id
from protocol.errors import ParseError, CapacityError
from protocol.keyboard_comm import Keyboard
from protocol.tap_dance import TapDanceEntry, tap_dances_from_json, tap_dances_to_json
from simulated_device import SimulatedDevice

CURRENT = Generation.CURRENT


def kc(name):
    return name_to_id(name, CURRENT)


class TestTapDance:

    def test_tap_hold(self):
        td = TapDanceEntry.from_string(7, "KC_V + KC_B ~ 50", CURRENT)
        assert td.index == 7
        assert (td.tap, td.hold, td.double_tap, td.tap_hold) == (kc("KC_V"), kc("KC_B"), 0, 0)
        assert td.tapping_term == 50

    def test_one_key(self):
        td = TapDanceEntry.from_string(0, "KC_A ~ 100", CURRENT)
        assert td.tap == kc("KC_A")
        assert td.hold == 0
        assert td.tapping_term == 100

    def test_four_keys(self):
        td = TapDanceEntry.from_string(1, "KC_A+KC_B+KC_C+KC_D ~ 200", CURRENT)
        assert td.keys() == [kc("KC_A"), kc("KC_B"), kc("KC_C"), kc("KC_D")]
        assert td.serialize() == struct.pack("<HHHHH", 4, 5, 6, 7, 200)

    @pytest.mark.parametrize("text", ["KC_A", "KC_A ~ abc", "INVALID ~ 100", "KC_A ~ 65536",
                                      "KC_A+KC_B+KC_C+KC_D+KC_E ~ 200"])
    def test_from_string_errors(self, text):
        with pytest.raises(ParseError):
            TapDanceEntry.from_string(0, text, CURRENT)

    def test_json(self):
        td = TapDanceEntry.from_json(0, ["KC_A", "KC_B", "KC_C", "KC_D", 250], CURRENT)
        assert td.keys() == [4, 5, 6, 7]
        assert td.tapping_term == 250

        # a short array just leaves the rest empty
        td = TapDanceEntry.from_json(0, ["KC_A"], CURRENT)
        assert td.tap == 4
        assert td.hold == 0

    @pytest.mark.parametrize("data", ["KC_A", ["KC_A", "KC_B", "KC_C", "KC_D", 200, "KC_E"],
                                      ["KC_A", "KC_B", "KC_C", "KC_D", "200"], [1, "KC_B"]])
    def test_json_errors(self, data):
        with pytest.raises(ParseError):
            TapDanceEntry.from_json(0, data, CURRENT)

    def test_empty(self):
        assert TapDanceEntry(0).is_empty()
        assert TapDanceEntry(0).tapping_term == 0
        assert TapDanceEntry.from_string(0, "", CURRENT).is_empty()
        assert not TapDanceEntry.from_string(1, "KC_A ~ 100", CURRENT).is_empty()

    def test_describe(self):
        assert TapDanceEntry(0).describe(CURRENT) == "0) EMPTY"
        td = TapDanceEntry.from_string(1, "KC_A + KC_B + KC_C + KC_D ~ 200", CURRENT)
        assert td.describe(CURRENT) == \
            "1) On tap: KC_A, On hold: KC_B, On double tap: KC_C, On tap + hold: KC_D, Tapping term (ms) = 200"
        td = TapDanceEntry.from_string(2, "KC_A + KC_NO ~ 150", CURRENT)
        assert td.describe(CURRENT) == "2) On tap: KC_A, Tapping term (ms) = 150"

    def test_json_round_trip(self):
        entries = [TapDanceEntry.from_string(0, "KC_A + KC_B ~ 100", CURRENT),
                   TapDanceEntry.from_string(1, "KC_C + KC_D + KC_E ~ 200", CURRENT)]
        data = tap_dances_to_json(entries, CURRENT)
        assert data[0] == ["KC_A", "KC_B", "KC_NO", "KC_NO", 100]
        assert tap_dances_from_json(data, CURRENT) == entries


class TestProtocolTapDance:

    def test_reload_and_set(self):
        dev = SimulatedDevice()
        dev.expect("FE0D0100", b"\x00" + struct.pack("<HHHHH", 4, 5, 0, 0, 200))
        dev.expect_write("FE0D0200" + struct.pack("<HHHHH", 6, 0, 0, 0, 150).hex())

        kb = Keyboard(dev)
        kb.tap_dance_count = 1
        kb.reload_tap_dance()
        assert kb.tap_dance_get(0) == TapDanceEntry(0, 4, 5, tapping_term=200)

        entry = TapDanceEntry.from_string(0, "KC_C ~ 150", CURRENT)
        kb.tap_dance_set(entry)
        assert kb.tap_dance_get(0) == entry
        dev.finish()

    def test_set_out_of_range(self):
        kb = Keyboard(SimulatedDevice())
        kb.tap_dance_count = 1
        with pytest.raises(CapacityError):
            kb.tap_dance_set(TapDanceEntry(1))
