from license_auditor.cli import main

main()
