"""
Configuration of the quality models.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from anonymization_quality.constants import SUPPRESSED_VALUE


@dataclass(frozen=True)
class QualityConfiguration:
    """
    Parameters shared by all quality models.

    Attributes
    ----------
    suppressed_value : str
        Label denoting a fully generalized (suppressed) value. Every resolved
        hierarchy ends with this label.
    """

    suppressed_value: str = SUPPRESSED_VALUE

    @classmethod
    def from_anonymization_config(
        cls, anonymization_config: Optional[Mapping[str, Any]] = None
    ) -> "QualityConfiguration":
        """
        Derive a quality configuration from the configuration of an anonymization run.

        Parameters
        ----------
        anonymization_config : Mapping[str, Any], optional
            Configuration used for the anonymization that produced the data.

        Returns
        -------
        QualityConfiguration
            Currently always the default configuration.

        Notes
        -----
        TODO(Later) take suppressed_value from the anonymization's suppression settings
        """
        return cls()
