import json
import lzma
import struct
import unittest

from keycodes.keycodes import Generation
from protocol.errors import ProtocolError, ProtocolUnhandledError
from protocol.keyboard_comm import Keyboard
from protocol.tap_dance import TapDanceEntry
from simulated_device import SimulatedDevice

LAYOUT_2x2 = """
{"name":"test","vendorId":"0x0000","productId":"0x1111","lighting":"none","matrix":{"rows":2,"cols":2},"layouts":{"keymap":[["0,0","0,1"],["1,0","1,1"]]}}
"""

LAYOUT_OPTIONS_2x2 = """
{"name":"test","vendorId":"0x0000","productId":"0x1111","matrix":{"rows":2,"cols":2},"layouts":{"labels":["Split Backspace",["Bottom row","ANSI","WKL"]],"keymap":[["0,0","0,1"],["1,0","1,1"]]}}
"""

UID = 0x1122334455667788


class TestKeyboard(unittest.TestCase):

    def test_reload_full(self):
        """ Tests the whole load sequence of a current Vial keyboard """
        dev = SimulatedDevice()
        dev.expect_capabilities(via=9, vial=6, layers=2, td=1)
        dev.expect_vial_protocol(6, UID)
        dev.expect_definition(json.loads(LAYOUT_OPTIONS_2x2))
        dev.expect("0202", struct.pack(">BBI", 0x02, 0x02, 0b011))
        dev.expect_keymap([[[4, 5], [6, 7]], [[8, 9], [10, 11]]])
        dev.expect("FE0D0100", b"\x00" + struct.pack("<HHHHH", 4, 5, 0, 0, 200))
        dev.expect_qsids([1, 2, 7])

        kb = Keyboard(dev)
        kb.reload()

        self.assertEqual(kb.via_protocol, 9)
        self.assertEqual(kb.vial_protocol, 6)
        self.assertEqual(kb.generation, Generation.CURRENT)
        self.assertEqual(kb.keyboard_uid, UID)
        self.assertEqual((kb.rows, kb.cols, kb.layers), (2, 2, 2))
        self.assertEqual(kb.definition["name"], "test")
        self.assertEqual(kb.layout_options, 0b011)
        self.assertEqual(kb.get_layout_options().selections(), [(0, 1), (1, 1)])
        self.assertEqual(kb.layout[(0, 0, 0)], 4)
        self.assertEqual(kb.layout[(0, 1, 1)], 7)
        self.assertEqual(kb.layout[(1, 0, 1)], 9)
        self.assertEqual(kb.layout[(1, 1, 1)], 11)
        self.assertEqual(kb.tap_dance_entries, [TapDanceEntry(0, 4, 5, tapping_term=200)])
        self.assertEqual(kb.combo_entries, [])
        self.assertEqual(kb.macros, [])
        self.assertEqual(kb.supported_settings, [1, 2, 7])
        dev.finish()

    def test_reload_legacy(self):
        dev = SimulatedDevice()
        dev.expect_capabilities(via=9, vial=5, layers=1)
        dev.expect_vial_protocol(5)
        dev.expect_definition(json.loads(LAYOUT_2x2))
        dev.expect_keymap([[[0x5101, 4], [5, 6]]])
        dev.expect_qsids([])

        kb = Keyboard(dev)
        kb.reload()
        self.assertEqual(kb.generation, Generation.LEGACY)
        self.assertIsNone(kb.layout_labels)
        self.assertEqual(kb.layout_options, -1)
        self.assertEqual(kb.layout[(0, 0, 0)], 0x5101)
        self.assertTrue(kb.get_layout_options().is_empty())
        dev.finish()

    def test_reload_via_only(self):
        """ Tests that a plain VIA keyboard skips everything Vial specific """
        dev = SimulatedDevice()
        dev.expect_capabilities(via=9, vial=0, layers=4)

        kb = Keyboard(dev)
        kb.reload()
        self.assertEqual(kb.vial_protocol, 0)
        self.assertEqual(kb.layers, 4)
        self.assertIsNone(kb.definition)
        self.assertEqual(kb.layout, {})
        self.assertEqual(kb.tap_dance_entries, [])
        dev.finish()

    def test_keymap_chunks(self):
        """ Tests that a keymap bigger than one buffer request is fetched in pieces """
        dev = SimulatedDevice()
        keymap = [[[r * 10 + c for c in range(5)] for r in range(4)]]
        dev.expect_keymap(keymap)

        kb = Keyboard(dev)
        kb.layers = 1
        kb.reload_keymap(4, 5)
        self.assertEqual(len(kb.layout), 20)
        self.assertEqual(kb.layout[(0, 3, 4)], 34)
        self.assertEqual(kb.layout[(0, 2, 1)], 21)
        dev.finish()

    def test_definition_unhandled(self):
        dev = SimulatedDevice()
        dev.expect("FE01", "FF")
        kb = Keyboard(dev)
        with self.assertRaises(ProtocolUnhandledError):
            kb.reload_definition()
        dev.finish()

    def test_definition_corrupt(self):
        dev = SimulatedDevice()
        dev.expect("FE01", struct.pack("<I", 10))
        dev.expect(struct.pack("<BBI", 0xFE, 0x02, 0), "0102030405060708090A")
        kb = Keyboard(dev)
        with self.assertRaises(ProtocolError):
            kb.reload_definition()
        self.assertIsNone(kb.definition)
        dev.finish()

    def test_definition_multiple_blocks(self):
        definition = json.loads(LAYOUT_2x2)
        definition["padding"] = [str(x) for x in range(200)]
        dev = SimulatedDevice()
        compressed = dev.expect_definition(definition)
        self.assertGreater(len(compressed), 32)

        kb = Keyboard(dev)
        self.assertEqual(kb.reload_definition(), definition)
        self.assertEqual((kb.rows, kb.cols), (2, 2))
        self.assertEqual(json.loads(lzma.decompress(compressed)), definition)
        dev.finish()

    def test_set_key(self):
        dev = SimulatedDevice()
        dev.expect_write(struct.pack(">BBBBH", 0x05, 1, 0, 1, 0x5101))

        kb = Keyboard(dev)
        kb.layout = {(1, 0, 1): 4}
        kb.set_key(1, 0, 1, 0x5101)
        self.assertEqual(kb.layout[(1, 0, 1)], 0x5101)
        # same keycode again does not touch the keyboard
        kb.set_key(1, 0, 1, 0x5101)
        dev.finish()
