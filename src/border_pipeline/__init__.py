"""Border Pipeline - add white borders to a folder of images with a worker pool."""

__version__ = "0.1.0"
