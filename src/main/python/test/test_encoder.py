import struct
import unittest

from keycodes.keycodes import Generation
from protocol.encoder import EncoderEntry, encoders_from_json, encoders_to_json, ENCODER_CCW, ENCODER_CW
from protocol.errors import ParseError, ProtocolUnhandledError
from protocol.keyboard_comm import Keyboard
from simulated_device import SimulatedDevice

CURRENT = Generation.CURRENT


def encoder_request(layer, idx):
    return struct.pack("BBBB", 0xFE, 0x03, layer, idx)


def set_request(layer, idx, direction, code):
    return struct.pack(">BBBBBH", 0xFE, 0x04, layer, idx, direction, code)


class TestProtocolEncoder(unittest.TestCase):

    def loaded_keyboard(self, dev):
        dev.expect(encoder_request(0, 0), struct.pack(">HH", 0x04, 0x05))
        dev.expect(encoder_request(1, 0), struct.pack(">HH", 0x06, 0x07))
        kb = Keyboard(dev)
        kb.layers = 2
        kb.reload_encoders(1)
        return kb

    def test_reload(self):
        dev = SimulatedDevice()
        kb = self.loaded_keyboard(dev)
        self.assertEqual(kb.encoder_count, 1)
        self.assertEqual(kb.encoders[(0, 0)], EncoderEntry(0, 0x04, 0x05))
        self.assertEqual(kb.encoders[(1, 0)].get(ENCODER_CW), 0x07)
        dev.finish()

    def test_set(self):
        dev = SimulatedDevice()
        kb = self.loaded_keyboard(dev)
        dev.expect(set_request(1, 0, ENCODER_CCW, 0x5101), set_request(1, 0, ENCODER_CCW, 0x5101))
        kb.set_encoder(1, 0, ENCODER_CCW, 0x5101)
        self.assertEqual(kb.encoders[(1, 0)], EncoderEntry(0, 0x5101, 0x07))
        dev.finish()

    def test_set_unchanged(self):
        """ Tests that writing the keycode the encoder already has sends nothing """
        dev = SimulatedDevice()
        kb = self.loaded_keyboard(dev)
        kb.set_encoder(0, 0, ENCODER_CW, 0x05)
        dev.finish()

    def test_set_invalid_direction(self):
        dev = SimulatedDevice()
        kb = Keyboard(dev)
        with self.assertRaises(ParseError):
            kb.set_encoder(0, 0, 2, 0x04)
        dev.finish()

    def test_unhandled(self):
        dev = SimulatedDevice()
        dev.expect(encoder_request(0, 0), "FF")
        kb = Keyboard(dev)
        kb.layers = 1
        with self.assertRaises(ProtocolUnhandledError):
            kb.reload_encoders(1)
        dev.finish()


class TestEncoderJson(unittest.TestCase):

    def test_from_json(self):
        encoders = encoders_from_json([[["KC_A", "KC_B"], ["KC_VOLD", "KC_VOLU"]], [["KC_NO", "MO(1)"]]], CURRENT)
        self.assertEqual(encoders[(0, 0)], EncoderEntry(0, 0x04, 0x05))
        self.assertEqual(encoders[(1, 0)], EncoderEntry(0, 0, 0x5221))
        self.assertEqual(encoders_from_json(None, CURRENT), {})

    def test_json_errors(self):
        for data in ["KC_A", ["KC_A"], [[["KC_A"]]], [[["KC_A", 5]]], [[["KC_A", "KC_B", "KC_C"]]]]:
            with self.assertRaises(ParseError, msg=data):
                encoders_from_json(data, CURRENT)

    def test_to_json(self):
        encoders = {(0, 0): EncoderEntry(0, 0x04, 0x05), (0, 1): EncoderEntry(1, 0, 0)}
        self.assertEqual(encoders_to_json(encoders, 1, 2, CURRENT), [[["KC_A", "KC_B"], ["KC_NO", "KC_NO"]]])
