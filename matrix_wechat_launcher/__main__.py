from matrix_wechat_launcher.launcher import main


main()
