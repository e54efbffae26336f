import struct

import pytest

from keycodes.keycodes import Generation
from protocol.capabilities import scan_capabilities
from protocol.errors import ProtocolUnhandledError, TransportError


class TestCapabilities:

    def test_full_negotiation(self, dev):
        dev.expect_via_protocol(9)
        dev.expect_vial_protocol(6)
        dev.expect_companion(1)
        dev.expect_layers(4)
        dev.expect_macro_info(16, 512)
        dev.expect_dynamic_counts(8, 16, 24, 32, flags=0b11)

        caps = scan_capabilities(dev)
        assert caps.via_version == 9
        assert caps.vial_version == 6
        assert caps.companion_hid_version == 1
        assert caps.layer_count == 4
        assert (caps.macro_count, caps.macro_buffer_size) == (16, 512)
        assert (caps.tap_dance_count, caps.combo_count, caps.key_override_count, caps.alt_repeat_key_count) == \
            (8, 16, 24, 32)
        assert caps.caps_word
        assert caps.layer_lock
        assert caps.generation == Generation.CURRENT
        assert caps.dynamic_entries

    def test_flags(self, dev):
        dev.expect_capabilities(vial=6, flags=0b10)
        caps = scan_capabilities(dev)
        assert not caps.caps_word
        assert caps.layer_lock

    def test_legacy(self, dev):
        dev.expect_capabilities(vial=5, td=2)
        caps = scan_capabilities(dev)
        assert caps.generation == Generation.LEGACY
        assert caps.tap_dance_count == 2

    def test_via_only(self, dev):
        """ Tests that a VIA keyboard without Vial stops before the dynamic entry counts """
        dev.expect_capabilities(via=9, vial=0, layers=3, macro_count=4, macro_size=100)
        caps = scan_capabilities(dev)
        assert caps.vial_version == 0
        assert caps.layer_count == 3
        assert caps.macro_count == 4
        assert caps.tap_dance_count == 0
        assert not caps.dynamic_entries
        assert caps.generation == Generation.LEGACY

    def test_no_via(self, dev):
        """ Tests that the layer count is not asked for when via version is 0 """
        dev.expect_capabilities(via=0, vial=6)
        caps = scan_capabilities(dev)
        assert caps.via_version == 0
        assert caps.layer_count == 0

    def test_vial_before_dynamic_entries(self, dev):
        dev.expect_capabilities(vial=3)
        caps = scan_capabilities(dev)
        assert caps.vial_version == 3
        assert not caps.dynamic_entries
        assert not caps.caps_word

    def test_unhandled_optional_features(self, dev):
        dev.expect_via_protocol(9)
        dev.expect_vial_protocol(6)
        dev.expect_companion()
        dev.expect("11", "FF")
        dev.expect("0C", "FF")
        dev.expect("0D", "FF")
        dev.expect_dynamic_counts()
        caps = scan_capabilities(dev)
        assert caps.companion_hid_version == 0
        assert caps.layer_count == 0
        assert caps.macro_count == 0
        assert caps.macro_buffer_size == 0

    def test_companion_timeout(self, dev):
        """ Tests that a keyboard ignoring the companion probe is still negotiated """
        dev.expect_via_protocol(9)
        dev.expect_vial_protocol(6)
        dev.expect_write("8800")
        dev.expect_layers(1)
        dev.expect_macro_info(0, 0)
        dev.expect_dynamic_counts()
        caps = scan_capabilities(dev)
        assert caps.companion_hid_version == 0
        assert caps.layer_count == 1

    def test_dynamic_counts_unhandled(self, dev):
        dev.expect_via_protocol(9)
        dev.expect_vial_protocol(6)
        dev.expect_companion()
        dev.expect_layers(1)
        dev.expect_macro_info(0, 0)
        dev.expect("FE0D00", "FF")
        with pytest.raises(ProtocolUnhandledError):
            scan_capabilities(dev)

    def test_transport_failure(self, dev):
        dev.expect_write("01")
        with pytest.raises(TransportError):
            scan_capabilities(dev)

    def test_slow_answer(self, dev):
        """ Tests that a few empty reads are retried without sending the request again """
        dev.expect("01", struct.pack(">BH", 1, 9), timeouts=4)
        dev.expect_vial_protocol(6)
        dev.expect_companion()
        dev.expect_layers(1)
        dev.expect_macro_info(0, 0)
        dev.expect_dynamic_counts()
        assert scan_capabilities(dev).via_version == 9
