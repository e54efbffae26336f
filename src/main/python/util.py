# SPDX-License-Identifier: GPL-2.0-or-later
import logging
import os
import pathlib
import sys
from logging.handlers import RotatingFileHandler

from hidproxy import hid
from protocol.errors import TransportError

# raw hid interface exposed by VIA/Vial firmware
VIA_USAGE_PAGE = 0xFF60
VIA_USAGE = 0x61

MSG_LEN = 32
READ_TIMEOUT_MS = 500
RECV_ATTEMPTS = 5


def hid_write(dev, msg):
    if len(msg) > MSG_LEN:
        raise TransportError("message must be less than 32 bytes")
    msg = bytes(msg) + b"\x00" * (MSG_LEN - len(msg))

    try:
        # add 00 at start for hidapi report id
        written = dev.write(b"\x00" + msg)
    except OSError as e:
        raise TransportError("failed to write to the device: {}".format(e)) from e
    if written != MSG_LEN + 1:
        raise TransportError("write returned {}, expected {}".format(written, MSG_LEN + 1))
    logging.debug("hid_write: %s", msg[:8].hex())


def hid_read(dev):
    try:
        data = bytes(dev.read(MSG_LEN, timeout_ms=READ_TIMEOUT_MS))
    except OSError as e:
        raise TransportError("failed to read from the device: {}".format(e)) from e
    if not data:
        raise TransportError("read timed out")
    logging.debug("hid_read: %s", data[:8].hex())
    return data


def hid_send(dev, msg, retries=RECV_ATTEMPTS):
    """ Sends one report and waits for the answer; only the receive side is retried """

    hid_write(dev, msg)

    attempt = 0
    while True:
        attempt += 1
        try:
            return hid_read(dev)
        except TransportError as e:
            if attempt >= retries:
                logging.error("hid_send: failed to communicate after %d attempts", attempt)
                raise
            logging.warning("hid_send: receive attempt %d failed: %s, %d attempts remaining",
                            attempt, e, retries - attempt)


def is_rawhid(desc, quiet=False):
    if desc["usage_page"] != VIA_USAGE_PAGE or desc["usage"] != VIA_USAGE:
        if not quiet:
            logging.warning("is_rawhid: {} does not match - usage_page={:04X} usage={:02X}".format(
                desc["path"], desc["usage_page"], desc["usage"]))
        return False

    # there's no reason to check for permission issues on mac or windows
    # and mac won't let us reopen an opened device
    if not sys.platform.startswith("linux"):
        return True

    dev = hid.device()
    try:
        dev.open_path(desc["path"])
    except OSError as e:
        if not quiet:
            logging.warning("is_rawhid: {} does not match - open_path error {}".format(desc["path"], e))
        return False

    dev.close()
    return True


def find_vial_devices(quiet=False):
    """ Lists descriptors of connected raw hid interfaces that speak VIA/Vial """

    filtered = []
    seen_paths = set()
    for desc in hid.enumerate():
        if desc["path"] in seen_paths:
            continue
        if is_rawhid(desc, quiet=True):
            if not quiet:
                logging.info("Matching VID={:04X}, PID={:04X}, serial={}, path={}".format(
                    desc["vendor_id"], desc["product_id"], desc.get("serial_number"), desc["path"]))
            filtered.append(desc)
            seen_paths.add(desc["path"])
    return filtered


def open_device(desc):
    dev = hid.device()
    try:
        dev.open_path(desc["path"])
    except OSError as e:
        raise TransportError("cannot open {}: {}".format(desc["path"], e)) from e
    return dev


def chunks(data, sz):
    for i in range(0, len(data), sz):
        yield data[i:i+sz]


def log_directory():
    directory = os.environ.get("VIAL_PROTOCOL_LOG_DIR")
    if directory:
        return directory
    return os.path.join(os.path.expanduser("~"), ".local", "share", "vial-protocol")


def init_logger(path=None, level=logging.INFO):
    logging.basicConfig(level=level)
    if path is None:
        directory = log_directory()
        pathlib.Path(directory).mkdir(parents=True, exist_ok=True)
        path = os.path.join(directory, "vial.log")
    handler = RotatingFileHandler(path, maxBytes=5 * 1024 * 1024, backupCount=5)
    handler.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(module)s:%(lineno)d - %(message)s"))
    logging.getLogger().addHandler(handler)
    return handler
