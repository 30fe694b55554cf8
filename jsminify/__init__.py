from jsminify.minify import Minifier, minify

__version__ = '1.0.0'

__all__ = ['Minifier', 'minify', '__version__']
