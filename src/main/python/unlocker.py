# SPDX-License-Identifier: GPL-2.0-or-later
import logging
import struct
import time
from collections import namedtuple

from protocol.constants import CMD_VIA_VIAL_PREFIX, CMD_VIAL_GET_UNLOCK_STATUS, CMD_VIAL_UNLOCK_START, \
    CMD_VIAL_UNLOCK_POLL

UNLOCK_KEYS = 15
POLL_INTERVAL = 1.0

LockStatus = namedtuple("LockStatus", ["locked", "unlock_in_progress", "unlock_buttons"])


class Unlocker:
    """
    Vial keyboards refuse some writes until the user holds a set of keys on the
    board itself for a few seconds. This drives that handshake.
    """

    @staticmethod
    def status(keyboard):
        data = keyboard.via_send(struct.pack("BB", CMD_VIA_VIAL_PREFIX, CMD_VIAL_GET_UNLOCK_STATUS))
        rowcol = []
        for x in range(UNLOCK_KEYS):
            row = data[2 + x * 2]
            col = data[3 + x * 2]
            if row != 255 and col != 255:
                rowcol.append((row, col))
        return LockStatus(data[0] == 0, data[1] == 1, rowcol)

    @staticmethod
    def unlock(keyboard, sleep=time.sleep, progress=None):
        """
        Starts unlocking (unless the keyboard is already counting down) and polls once a
        second until the keyboard reports it is unlocked. progress, if given, is called
        with the seconds the keyboard says remain.
        """

        status = Unlocker.status(keyboard)
        if not status.locked:
            return status

        logging.info("Unlocker: hold keys %s to unlock", status.unlock_buttons)
        if not status.unlock_in_progress:
            keyboard.via_send(struct.pack("BB", CMD_VIA_VIAL_PREFIX, CMD_VIAL_UNLOCK_START))

        while True:
            sleep(POLL_INTERVAL)
            data = keyboard.via_send(struct.pack("BB", CMD_VIA_VIAL_PREFIX, CMD_VIAL_UNLOCK_POLL))
            unlocked = data[0] == 1
            seconds = data[2]
            logging.debug("Unlocker: unlocked=%s seconds remaining=%d", unlocked, seconds)
            if progress is not None:
                progress(seconds)
            if unlocked:
                break

        return Unlocker.status(keyboard)
