from nk2_export.main import main

main()
