"""Container entrypoint for the matrix-wechat bridge.

Makes sure /data/config.yaml exists, then hands the process over to the
bridge binary.
"""

__version__ = "0.1.0"
