"""Arc-length measurement of polygon outlines.

Each cubic of an outline is assigned an interval of "outline progress" in
[0, 1], proportional to its approximate arc length. Corner features get a
single representative progress value. The measured form is transient: the
matcher builds it, cuts it, and keeps only the resulting cubics.
"""

import logging
from dataclasses import dataclass, replace

from shapemorph.domain import DISTANCE_EPSILON, Corner, Cubic, Feature, RoundedPolygon
from shapemorph.domain.geometry import positive_modulo

logger = logging.getLogger(__name__)


class LengthMeasurer:
    """Approximates cubic arc length by summing chords between samples.

    Attributes:
        segments: Number of chords per cubic
    """

    def __init__(self, segments: int = 3) -> None:
        if segments < 1:
            raise ValueError(f"segments must be >= 1, got {segments}")
        self.segments = segments

    def measure_cubic(self, cubic: Cubic) -> float:
        """Approximate arc length of a cubic."""
        return self._closest_progress_to(cubic, float("inf"))[1]

    def find_cubic_cut_point(self, cubic: Cubic, measure: float) -> float:
        """Curve parameter at which ``measure`` length has been travelled."""
        return self._closest_progress_to(cubic, measure)[0]

    def _closest_progress_to(self, cubic: Cubic, threshold: float) -> tuple[float, float]:
        """Walk the chords until ``threshold`` length is used up.

        Returns:
            Tuple of (curve parameter reached, length measured)
        """
        total = 0.0
        remainder = threshold
        prev = cubic.anchor0

        for i in range(1, self.segments + 1):
            progress = i / self.segments
            point = cubic.point_on_curve(progress)
            segment = (point - prev).get_distance()

            if segment >= remainder:
                fraction = remainder / segment if segment > 0 else 0.0
                return progress - (1.0 - fraction) / self.segments, threshold

            remainder -= segment
            total += segment
            prev = point

        return 1.0, total


@dataclass(frozen=True, slots=True)
class MeasuredCubic:
    """A cubic annotated with its outline progress interval.

    Attributes:
        cubic: The curve
        start_outline_progress: Progress where the cubic starts
        end_outline_progress: Progress where the cubic ends
        measured_size: Arc length of the cubic
    """

    cubic: Cubic
    start_outline_progress: float
    end_outline_progress: float
    measured_size: float

    def cut_at_progress(
        self,
        cut_outline_progress: float,
        measurer: LengthMeasurer,
    ) -> tuple["MeasuredCubic", "MeasuredCubic"]:
        """Split at a global outline progress value.

        The progress is clamped into this cubic's interval, converted into
        a local curve parameter by inverse length lookup, and both halves
        are re-measured.

        Args:
            cut_outline_progress: Global progress to cut at
            measurer: Measurer used for the lookup

        Returns:
            Tuple of (part before the cut, part after the cut)
        """
        bounded = max(self.start_outline_progress, min(self.end_outline_progress, cut_outline_progress))
        outline_progress_size = self.end_outline_progress - self.start_outline_progress
        progress_from_start = bounded - self.start_outline_progress
        relative_progress = progress_from_start / outline_progress_size if outline_progress_size > 0 else 0.0
        t = measurer.find_cubic_cut_point(self.cubic, relative_progress * self.measured_size)

        c1, c2 = self.cubic.split(t)
        return (
            MeasuredCubic(c1, self.start_outline_progress, bounded, measurer.measure_cubic(c1)),
            MeasuredCubic(c2, bounded, self.end_outline_progress, measurer.measure_cubic(c2)),
        )


@dataclass(frozen=True, slots=True)
class ProgressableFeature:
    """A feature pinned to a single outline progress value."""

    progress: float
    feature: Feature


def _measured_cubics(
    cubics: list[Cubic],
    outline_progress: list[float],
    measurer: LengthMeasurer,
) -> list[MeasuredCubic]:
    """Attach progress intervals, dropping cubics too short to matter.

    ``outline_progress`` holds len(cubics) + 1 boundaries. The last kept
    cubic always ends at exactly 1.
    """
    measured: list[MeasuredCubic] = []
    start_progress = 0.0
    for i, cubic in enumerate(cubics):
        if outline_progress[i + 1] - outline_progress[i] > DISTANCE_EPSILON:
            measured.append(
                MeasuredCubic(cubic, start_progress, outline_progress[i + 1], measurer.measure_cubic(cubic))
            )
            start_progress = outline_progress[i + 1]
    if measured:
        measured[-1] = replace(measured[-1], end_outline_progress=1.0)
    return measured


@dataclass(frozen=True)
class MeasuredPolygon:
    """A polygon outline annotated with outline progress.

    Attributes:
        cubics: Measured cubics covering [0, 1] in order
        features: Corner features with their representative progress
        measurer: Measurer used to build this instance
    """

    cubics: list[MeasuredCubic]
    features: list[ProgressableFeature]
    measurer: LengthMeasurer

    @classmethod
    def measure(cls, polygon: RoundedPolygon, measurer: LengthMeasurer) -> "MeasuredPolygon":
        """Measure a polygon's feature cubics.

        Each corner is pinned to the middle of its middle cubic (the arc for
        a rounded corner).

        Args:
            polygon: Polygon to measure
            measurer: Arc length measurer

        Returns:
            MeasuredPolygon for the polygon's outline
        """
        cubics: list[Cubic] = []
        feature_to_cubic: list[tuple[Feature, int]] = []

        for feature in polygon.features:
            for index, cubic in enumerate(feature.cubics):
                if isinstance(feature, Corner) and index == len(feature.cubics) // 2:
                    feature_to_cubic.append((feature, len(cubics)))
                cubics.append(cubic)

        measures = [0.0]
        cumulative = 0.0
        for cubic in cubics:
            cumulative += measurer.measure_cubic(cubic)
            measures.append(cumulative)
        total_measure = cumulative

        if total_measure > 0:
            outline_progress = [m / total_measure for m in measures]
        else:
            # Degenerate outline: spread progress evenly
            outline_progress = [i / len(cubics) for i in range(len(cubics) + 1)] if cubics else [0.0]

        features = [
            ProgressableFeature(
                positive_modulo((outline_progress[ix] + outline_progress[ix + 1]) / 2, 1),
                feature,
            )
            for feature, ix in feature_to_cubic
        ]

        logger.debug(
            "Measured outline: %d cubics, %d corners, length %.4f",
            len(cubics),
            len(features),
            total_measure,
        )
        return cls(
            cubics=_measured_cubics(cubics, outline_progress, measurer),
            features=features,
            measurer=measurer,
        )

    def cut_and_shift(self, cutting_point: float) -> "MeasuredPolygon":
        """Rotate the outline so ``cutting_point`` becomes progress 0.

        The cubic containing the cut is split; its second half leads the new
        list and its first half closes it. Cubic intervals and feature
        progress values are shifted modulo 1.

        Args:
            cutting_point: Outline progress in [0, 1) to move to the origin

        Returns:
            New MeasuredPolygon; unchanged when the cut is already at 0
        """
        if cutting_point < DISTANCE_EPSILON:
            return self

        cubics = self.cubics
        target_index = next(
            (
                i
                for i, c in enumerate(cubics)
                if c.start_outline_progress <= cutting_point <= c.end_outline_progress
            ),
            len(cubics) - 1,
        )
        b1, b2 = cubics[target_index].cut_at_progress(cutting_point, self.measurer)

        ret_cubics = [b2.cubic]
        for i in range(1, len(cubics)):
            ret_cubics.append(cubics[(i + target_index) % len(cubics)].cubic)
        ret_cubics.append(b1.cubic)

        ret_outline_progress = [0.0]
        for index in range(1, len(cubics) + 1):
            cubic_index = (target_index + index - 1) % len(cubics)
            ret_outline_progress.append(
                positive_modulo(cubics[cubic_index].end_outline_progress - cutting_point, 1)
            )
        ret_outline_progress.append(1.0)

        new_features = [
            ProgressableFeature(positive_modulo(f.progress - cutting_point, 1), f.feature)
            for f in self.features
        ]

        return MeasuredPolygon(
            cubics=_measured_cubics(ret_cubics, ret_outline_progress, self.measurer),
            features=new_features,
            measurer=self.measurer,
        )
