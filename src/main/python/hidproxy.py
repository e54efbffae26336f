# SPDX-License-Identifier: GPL-2.0-or-later
import sys

if sys.platform == "linux":
    # hidraw backend reports usage_page on Linux, libusb backend does not
    try:
        import hidraw as hid
    except ImportError:
        import hid
else:
    import hid

# allow other clients (e.g. the vendor's own tool) to keep the device open on macOS
if sys.platform == "darwin" and hasattr(hid, "darwin_set_open_exclusive"):
    hid.darwin_set_open_exclusive(0)
