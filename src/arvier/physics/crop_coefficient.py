"""
Crop coefficient (Kc) curve keyed by accumulated heat units.

The curve follows the FAO-56 trapezoid (Allen et al., 1998) but its
breakpoints are degree-day values instead of stage lengths in days, so the
same shape serves crops with very different phenologies:

    Kc
    peak        ┌───────────┐
               /             \\
    initial __/               \\__ end
              0    mid    late   end   (cumulative GDD)

- Development (0 -> mid): linear kc_initial -> kc_peak
- Mid-season (mid -> late): constant kc_peak
- Late season (late -> end): linear kc_peak -> kc_end
"""
from arvier.core.types import CropCoefficient, DegreeDays, Millimetres
from arvier.data.contracts import CropConfig


def interpolate_kc(cumulative_gdd: DegreeDays, crop: CropConfig) -> CropCoefficient:
    """
    Interpolate Kc from accumulated GDD.

    Breakpoints come from the crop's phase thresholds by position:
    ``[0]`` ends development, ``[1]`` ends mid-season and ``[-1]`` ends
    the season. With fewer than two thresholds the curve is flat at
    ``kc_initial``.

    Args:
        cumulative_gdd: Degree-days driving the curve (cycle GDD for pastures)
        crop: Crop parameters

    Returns:
        Crop coefficient (dimensionless)
    """
    thresholds = crop.phase_thresholds

    if len(thresholds) < 2:
        return crop.kc_initial

    mid_gdd = thresholds[0].gdd
    late_gdd = thresholds[1].gdd
    end_gdd = thresholds[-1].gdd

    if cumulative_gdd <= 0:
        return crop.kc_initial

    # Development stage - linear increase
    if cumulative_gdd < mid_gdd:
        frac = cumulative_gdd / mid_gdd
        return crop.kc_initial + frac * (crop.kc_peak - crop.kc_initial)

    # Mid-season
    if cumulative_gdd < late_gdd:
        return crop.kc_peak

    # Late season - linear decrease
    if cumulative_gdd < end_gdd:
        frac = (cumulative_gdd - late_gdd) / (end_gdd - late_gdd)
        return crop.kc_peak + frac * (crop.kc_end - crop.kc_peak)

    # Past end of season
    return crop.kc_end


def calculate_etc(et0_mm: Millimetres, kc: CropCoefficient) -> Millimetres:
    """Crop evapotranspiration: ETc = ET0 × Kc"""
    return et0_mm * kc
