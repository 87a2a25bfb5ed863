"""JSON configuration for the queensearch comparison harness.

A configuration file groups the comparison defaults in four sections:

- experiment_settings: N values, solvers, run count, base seed, output dir.
- timeout_settings: per-run wall-clock limit in seconds (null = unlimited).
- solver_limits: size caps for the exhaustive and greedy solvers and for
  printing boards.
- solver_parameters: mapping solver label -> constructor keyword overrides.

Sections are returned as plain dicts (empty when absent). Interpreting the
values is left to ``queensearch.analysis.cli.apply_configuration``.
"""
import json
from pathlib import Path


class ConfigManager:
    """Read and write a comparison configuration file.

    Parameters
    ----------
    config_path : str | os.PathLike, default "config.json"
        Location of the JSON file; it must exist.
    """

    def __init__(self, config_path="config.json"):
        self.config_path = Path(config_path)
        self.config = self.load_config()

    def load_config(self):
        """Parse the file and return its top-level object.

        Raises
        ------
        FileNotFoundError
            If the file does not exist.
        ValueError
            If the file is not valid JSON or its root is not an object.
        """
        if not self.config_path.is_file():
            raise FileNotFoundError(f"No configuration file at {self.config_path}")

        with self.config_path.open("r") as handle:
            try:
                data = json.load(handle)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Invalid JSON in {self.config_path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError(f"Configuration root must be an object: {self.config_path}")
        return data

    def save_config(self):
        with self.config_path.open("w") as handle:
            json.dump(self.config, handle, indent=2)

    def _section(self, name):
        return self.config.get(name, {})

    def get_experiment_settings(self):
        return self._section("experiment_settings")

    def get_timeout_settings(self):
        return self._section("timeout_settings")

    def get_solver_limits(self):
        return self._section("solver_limits")

    def get_solver_parameters(self, label=None):
        """Return constructor overrides for every solver, or for ``label`` only."""
        parameters = self._section("solver_parameters")
        if label:
            return parameters.get(label, {})
        return parameters

    def update_setting(self, section, key, value):
        """Set ``section.key`` to ``value`` and write the file back."""
        self.config.setdefault(section, {})[key] = value
        self.save_config()
