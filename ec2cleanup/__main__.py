"""Allow ``python -m ec2cleanup``."""

from ec2cleanup.main import main

main()
