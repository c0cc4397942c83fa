"""Configuration of mass evaluation and formula resolution.

MassConfiguration :
    Store constants used to compute masses and resolve formulas.

"""

from __future__ import annotations

import logging
import pathlib

import pydantic
import yaml

from . import _constants as c

logger = logging.getLogger(__file__)


class MassConfiguration(pydantic.BaseModel):
    """
    Store mass evaluation and formula resolution configuration.

    Parameters
    ----------
    electron_mass : float
        Mass of the electron, used to correct the mass of charged species.
    default_ppm : float
        Mass tolerance, in ppm, used when a mass comparison does not provide
        one.
    normalizer_url : str
        URL of the ChemCalc molecular formula service used to resolve formula
        strings that are not in Hill notation.
    normalizer_timeout : float
        Timeout, in seconds, for requests to the formula service.
    use_remote_normalizer : bool
        If ``False``, never query the formula service.

    """

    model_config = pydantic.ConfigDict(frozen=True)

    electron_mass: pydantic.PositiveFloat = c.EM
    default_ppm: pydantic.PositiveFloat = c.DEFAULT_PPM
    normalizer_url: str = c.CHEMCALC_URL
    normalizer_timeout: pydantic.PositiveFloat = c.CHEMCALC_TIMEOUT
    use_remote_normalizer: bool = True

    @classmethod
    def from_yaml(cls, yaml_path: pathlib.Path) -> MassConfiguration:
        """Create a configuration instance from a YAML file."""
        yaml_path = pathlib.Path(yaml_path)
        with yaml_path.open("rt") as file:
            d = yaml.safe_load(file) or dict()
        logger.debug("Loaded mass configuration from %s", yaml_path)
        return cls(**d)

    def to_yaml(self, yaml_path: pathlib.Path) -> None:
        """Dump the configuration into a YAML file."""
        yaml_path = pathlib.Path(yaml_path)
        with yaml_path.open("wt") as file_out:
            yaml.dump(self.model_dump(), file_out)


DEFAULT_CONFIGURATION = MassConfiguration()
