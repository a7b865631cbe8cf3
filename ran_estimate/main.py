#!/usr/bin/env python3
"""
RAN-Estimate 主程序入口
"""

import sys

from ran_estimate.cli.commands import main

if __name__ == "__main__":
    sys.exit(main())
