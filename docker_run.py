"""Container entrypoint shim.

Provisions /data/config.yaml and hands the process over to the
matrix-wechat bridge (see `matrix_wechat_launcher.launcher`).
"""

from matrix_wechat_launcher.launcher import main


main()
