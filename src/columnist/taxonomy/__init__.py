"""Channel/column taxonomy and post classification."""

from columnist.taxonomy.channels import CHANNELS_CONFIG
from columnist.taxonomy.rules import Taxonomy

__all__ = ["CHANNELS_CONFIG", "Taxonomy"]
