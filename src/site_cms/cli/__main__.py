from site_cms.cli import main

main()
