"""mapnikstyle: translate neutral cartographic styles to and from Mapnik XML."""

__version__ = "0.1.0"
