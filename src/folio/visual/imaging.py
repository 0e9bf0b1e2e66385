"""Screenshot comparison with Pillow."""

from __future__ import annotations

from dataclasses import dataclass

from PIL import Image, ImageChops

HIGHLIGHT = (255, 0, 0, 255)


@dataclass(frozen=True, slots=True)
class ImageDiff:
    """Outcome of comparing an actual screenshot with its baseline."""

    differing_pixels: int
    total_pixels: int
    size_mismatch: bool = False
    diff_image: Image.Image | None = None

    @property
    def ratio(self) -> float:
        if self.size_mismatch:
            return 1.0
        if not self.total_pixels:
            return 0.0
        return self.differing_pixels / self.total_pixels

    def within(self, max_diff_ratio: float) -> bool:
        return not self.size_mismatch and self.ratio <= max_diff_ratio


def compare_images(
    expected: Image.Image,
    actual: Image.Image,
    *,
    pixel_tolerance: float = 0.2,
) -> ImageDiff:
    """Count pixels whose largest channel difference exceeds the tolerance.

    *pixel_tolerance* is a fraction of the 0-255 channel range.  The diff
    image is the actual screenshot in greyscale with differing pixels
    painted red.
    """
    exp = expected.convert("RGBA")
    act = actual.convert("RGBA")
    if exp.size != act.size:
        return ImageDiff(
            differing_pixels=0,
            total_pixels=act.size[0] * act.size[1],
            size_mismatch=True,
        )

    bands = ImageChops.difference(exp, act).split()
    strongest = bands[0]
    for band in bands[1:]:
        strongest = ImageChops.lighter(strongest, band)

    threshold = int(round(max(0.0, min(1.0, pixel_tolerance)) * 255))
    mask = strongest.point(lambda v: 255 if v > threshold else 0)
    differing = mask.histogram()[255]

    diff_image = None
    if differing:
        base = act.convert("L").convert("RGBA")
        diff_image = Image.composite(Image.new("RGBA", act.size, HIGHLIGHT), base, mask)

    return ImageDiff(
        differing_pixels=differing,
        total_pixels=act.size[0] * act.size[1],
        diff_image=diff_image,
    )
