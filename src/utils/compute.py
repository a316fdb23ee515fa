"""Coordinate conversions between device space and buffer space.

Provides:
    - surface_size_px(): backing buffer size for a surface at a given DPR
    - device_to_buffer(): pointer position → integer buffer coordinates

Coordinate frames:
    Device frame: CSS/screen units reported by the pointer device,
        origin top-left, +X right, +Y down
    Buffer frame: integer pixel indices of the PixelBuffer, same orientation,
        scaled by the device pixel ratio and shifted by the surface origin

These transforms belong to the input/presentation boundary; the raster
engine only ever sees buffer-space integers.
"""

from typing import Tuple


def surface_size_px(
    width: float,
    height: float,
    device_pixel_ratio: float = 1.0
) -> Tuple[int, int]:
    """Compute the backing buffer size for a display surface.

    Parameters
    ----------
    width : float
        Surface width in device (CSS) units
    height : float
        Surface height in device (CSS) units
    device_pixel_ratio : float
        Physical pixels per device unit, default 1.0

    Returns
    -------
    Tuple[int, int]
        (width_px, height_px), each rounded to the nearest integer

    Raises
    ------
    ValueError
        If the ratio is not positive or the rounded size is empty
    """
    if device_pixel_ratio <= 0:
        raise ValueError(f"device_pixel_ratio must be positive, got {device_pixel_ratio}")

    w_px = int(round(width * device_pixel_ratio))
    h_px = int(round(height * device_pixel_ratio))
    if w_px <= 0 or h_px <= 0:
        raise ValueError(
            f"Surface {width}x{height} at dpr={device_pixel_ratio} gives empty buffer "
            f"({w_px}x{h_px})"
        )
    return w_px, h_px


def device_to_buffer(
    x: float,
    y: float,
    device_pixel_ratio: float = 1.0,
    origin: Tuple[float, float] = (0.0, 0.0)
) -> Tuple[int, int]:
    """Convert a device-space pointer position to buffer coordinates.

    Parameters
    ----------
    x, y : float
        Pointer position in device units
    device_pixel_ratio : float
        Physical pixels per device unit
    origin : Tuple[float, float]
        Surface origin offset in buffer pixels, subtracted after scaling

    Returns
    -------
    Tuple[int, int]
        Integer buffer coordinates, truncated toward zero

    Notes
    -----
    Result may lie outside the buffer; the engine clips at write time.
    """
    bx = x * device_pixel_ratio - origin[0]
    by = y * device_pixel_ratio - origin[1]
    return int(bx), int(by)
