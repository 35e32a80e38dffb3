"""
Crop catalogue for the Arvier multi-crop irrigation system.

Values are calibrated for alpine conditions in the Aosta Valley. Additional
crops can be loaded from a YAML file with the same fields as ``CropConfig``::

    potatoes:
      base_temp: 7.0
      kc_initial: 0.50
      kc_peak: 1.15
      kc_end: 0.75
      phase_thresholds:
        - {name: Emergence, gdd: 150}
        - {name: Tuber Initiation, gdd: 450}
        - {name: Maturity, gdd: 1200}
"""
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

import yaml
from pydantic import ValidationError

from arvier.core.exceptions import CropConfigurationError, ErrorContext
from arvier.core.types import CropName
from arvier.data.contracts import CropConfig

logger = logging.getLogger(__name__)


def _crop(base_temp, kc_initial, kc_peak, kc_end, phases, multi_cycle=False) -> CropConfig:
    return CropConfig(
        base_temp=base_temp,
        kc_initial=kc_initial,
        kc_peak=kc_peak,
        kc_end=kc_end,
        phase_thresholds=[{"name": name, "gdd": gdd} for name, gdd in phases],
        multi_cycle=multi_cycle,
    )


# Format: (T_base, Kc_ini, Kc_peak, Kc_end, [(phase, GDD), ...])
CROP_SETTINGS: Dict[CropName, CropConfig] = {
    "apple": _crop(
        4.5, 0.40, 1.00, 0.70,
        [("Bloom", 350), ("Expansion", 800), ("Maturity", 2500)],
    ),
    "vineyard": _crop(
        10.0, 0.30, 0.70, 0.45,
        [("Budburst", 200), ("Flowering", 500), ("Harvest", 1300)],
    ),
    "pasture": _crop(
        0.0, 0.50, 1.05, 0.80,
        [("Initial", 200), ("Growth", 500), ("Harvest", 800)],
        multi_cycle=True,
    ),
}


def _normalize(crop_name: str) -> str:
    return crop_name.strip().lower().replace(" ", "_")


def list_crops(catalog: Optional[Dict[CropName, CropConfig]] = None) -> List[CropName]:
    """Names of the crops in the catalogue"""
    return list((catalog or CROP_SETTINGS).keys())


def get_crop_config(
    crop_name: str,
    catalog: Optional[Dict[CropName, CropConfig]] = None
) -> CropConfig:
    """
    Look up a crop by name (case-insensitive).

    Raises:
        CropConfigurationError: if the crop is not in the catalogue
    """
    catalog = catalog or CROP_SETTINGS
    crop_key = _normalize(crop_name)
    if crop_key not in catalog:
        raise CropConfigurationError(
            f"Unknown crop '{crop_name}'. Available: {', '.join(catalog)}",
            ErrorContext(crop=crop_name, component="crops", operation="lookup"),
        )
    return catalog[crop_key]


def is_multi_cycle(crop_name: str, catalog: Optional[Dict[CropName, CropConfig]] = None) -> bool:
    """Whether the crop is simulated as repeating pasture cycles"""
    return get_crop_config(crop_name, catalog).multi_cycle


def load_crop_catalog(
    yaml_path: Union[str, Path],
    include_defaults: bool = True
) -> Dict[CropName, CropConfig]:
    """
    Load crop definitions from a YAML mapping of name -> CropConfig fields.

    Entries in the file override built-in crops with the same name.
    """
    yaml_path = Path(yaml_path)
    if not yaml_path.exists():
        raise CropConfigurationError(
            f"Crop catalogue not found: {yaml_path}",
            ErrorContext(component="crops", operation="load"),
        )

    with open(yaml_path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise CropConfigurationError(
            f"Crop catalogue must be a mapping of crop name to parameters: {yaml_path}",
            ErrorContext(component="crops", operation="load"),
        )

    catalog = dict(CROP_SETTINGS) if include_defaults else {}
    for name, params in raw.items():
        try:
            catalog[_normalize(str(name))] = CropConfig(**(params or {}))
        except (TypeError, ValidationError) as e:
            raise CropConfigurationError(
                f"Invalid parameters for crop '{name}': {e}",
                ErrorContext(crop=str(name), component="crops", operation="load"),
            ) from e

    logger.info(f"Loaded {len(raw)} crop definitions from {yaml_path}")
    return catalog
