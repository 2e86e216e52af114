"""
Payload framing for the external barcode renderer.

Stored payloads are kept exactly as scanned. Some symbologies need the
payload adjusted before an encoder will accept it; that happens here, at
render time only.
"""

CODABAR = "CODABAR"

# Start/stop characters the CODABAR encoder accepts
CODABAR_START_END_CHARS = frozenset("ATBNC*DE")


def frame_for_render(format: str, data: str) -> str:
    """
    Adjust a stored payload for rendering

    The CODABAR decoder drops the start/stop characters, so a scanned
    payload is assumed to have used A to start. The encoder rejects A-D as
    stop characters, so N (the alternate for B) is appended instead.

    Args:
        format: Barcode format name
        data: Stored payload

    Returns:
        The payload to hand to the renderer
    """
    if format != CODABAR or not data:
        return data

    if data[0] not in CODABAR_START_END_CHARS:
        data = "A" + data
    if data[-1] not in CODABAR_START_END_CHARS:
        data = data + "N"
    return data
