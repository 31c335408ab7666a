# integrations.py
#
# Marketplace integrations may require a minimum volume size per storage
# type. The planner only sees the lookup protocol; where the numbers come
# from is up to the caller.

from dataclasses import dataclass
from typing import Mapping, Optional, Protocol

from pool_sizer.units import K8S_UNITS, Magnitude, to_bytes


@dataclass(frozen=True)
class MinimumVolumeSize:
    magnitude: Magnitude
    unit: str   # k8s symbol, e.g. "Gi"
    label: str  # human readable storage type name

    def to_bytes(self) -> int:
        return to_bytes(self.magnitude, self.unit, K8S_UNITS)

    def __str__(self) -> str:
        return f"{self.magnitude}{self.unit}"


class VolumeSizeCatalog(Protocol):
    def lookup_minimum_volume_size(
        self, marketplace: str, storage_type: str
    ) -> Optional[MinimumVolumeSize]:
        ...


@dataclass(frozen=True)
class IntegrationContext:
    marketplace: str
    storage_type: str
    catalog: VolumeSizeCatalog


class StaticVolumeSizeCatalog:
    """
    Catalog backed by the nested configuration integrations publish:

        {
            "<marketplace>": {
                "variants": {"<storage type>": "<label>", ...},
                "configurations": [
                    {
                        "typeSelection": "<storage type>",
                        "minimumVolumeSize": {"driveSize": "125", "sizeUnit": "Gi"},
                    },
                    ...
                ],
            },
        }

    Marketplaces without configuration, storage types without a
    minimumVolumeSize entry, and unknown storage types all yield None.
    """

    def __init__(self, configurations: Mapping[str, Mapping]):
        self._configurations = configurations

    def lookup_minimum_volume_size(
        self, marketplace: str, storage_type: str
    ) -> Optional[MinimumVolumeSize]:
        config = self._configurations.get(marketplace) or {}
        if not config:
            return None

        selection = next(
            (
                item
                for item in config.get("configurations", [])
                if item.get("typeSelection") == storage_type
            ),
            None,
        )
        if selection is None or not selection.get("minimumVolumeSize"):
            return None

        minimum = selection["minimumVolumeSize"]
        label = config.get("variants", {}).get(storage_type, storage_type)

        return MinimumVolumeSize(
            magnitude=minimum["driveSize"],
            unit=minimum["sizeUnit"],
            label=label,
        )
