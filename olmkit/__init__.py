"""Building blocks for an operator lifecycle manager: operator groups, pod spec
overrides, sync tracking, configuration, bundle manifests, catalog image
templates and adoptable component kinds."""

__version__ = "0.1.0"