"""
Copyright (c) 2025, salesforce.com, inc.
All rights reserved.
SPDX-License-Identifier: BSD-3-Clause
For full license text, see the LICENSE file in the repo root or https://opensource.org/licenses/BSD-3-Clause


Poor man's logger.
Everything goes to stderr, stdout is reserved for program output (for example
a pom written to stdout).
"""

import sys


def info(msg):
    _log(msg, "INFO")

def debug(msg):
    _log(msg, "DEBUG")

def warning(msg):
    _log(msg, "WARNING")

def error(msg):
    _log(msg, "ERROR")

def raw(msg):
    sys.stderr.write(msg)
    sys.stderr.flush()

def _log(msg, level):
    raw("[%s] %s\n" % (level, msg))
