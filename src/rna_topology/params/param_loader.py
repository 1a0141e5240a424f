from __future__ import annotations
import logging
from importlib.resources import files as importlib_files
from pathlib import Path

from rna_topology.params.data.yaml_io import read_yaml
from rna_topology.params.data.parsers import get_float, get_section, parse_pairing, parse_pockets
from rna_topology.params.param_types import TopologyParams

logger = logging.getLogger(__name__)

DEFAULT_PARAMS_FILE = "topology_defaults.yaml"


def default_params_path() -> Path:
    """Location of the parameter file shipped with the package."""
    return Path(str(importlib_files("rna_topology") / "data" / DEFAULT_PARAMS_FILE))


class TopologyParamsLoader:
    """
    Loads engine parameters from a YAML file into an immutable `TopologyParams`.

    Sections missing from the file keep the built-in defaults, so a YAML file
    only needs to list the constants it changes.
    """
    def load(self, yaml_path: str | Path | None = None) -> TopologyParams:
        """
        Read `yaml_path` (or the bundled defaults) and build the parameter bundle.

        Parameters
        ----------
        yaml_path : str | Path | None
            The parameter file. When None, the packaged
            `data/topology_defaults.yaml` is used.

        Returns
        -------
        TopologyParams
            The parsed parameters.

        Raises
        ------
        InvalidInputError
            If the file is missing, is not YAML, or holds malformed values.
        """
        path = Path(yaml_path) if yaml_path is not None else default_params_path()
        data = read_yaml(path)
        base = TopologyParams()

        params = TopologyParams(
            pairing=parse_pairing(data, base.pairing),
            pockets=parse_pockets(data, base.pockets),
            zero_tolerance=get_float(get_section(data, "linalg"), "zero_tolerance", base.zero_tolerance),
        )
        logger.debug(f"Loaded topology parameters from {path}")
        return params
