"""CentOS container base image builder.

Bootstraps an RPM root filesystem into a directory, customizes it for a
container runtime, installs guest tools and archives the result as
``<image-name>-<YYYYMMDD>.tar.gz``.
"""

__all__ = []
