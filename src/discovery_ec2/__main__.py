"""Entry point for running discovery-ec2 as a module: python -m discovery_ec2"""

import sys

from discovery_ec2.cli import main

if __name__ == "__main__":
    sys.exit(main())
