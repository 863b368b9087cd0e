from .spaces import DEFAULT_SPACE, SPACES, get_space

__version__ = '0.1.0'
