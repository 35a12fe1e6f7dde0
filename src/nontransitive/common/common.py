"""
Copyright (c) 2025, salesforce.com, inc.
All rights reserved.
SPDX-License-Identifier: BSD-3-Clause
For full license text, see the LICENSE file in the repo root or https://opensource.org/licenses/BSD-3-Clause


Common utility functions shared by the command line entrypoint and the
modules that read input files.
"""

import os


def get_repo_root(repo_root=None):
    """
    Returns the repository root: the specified path, or, if not specified,
    the directory bazel run was invoked from, or the current directory.
    """
    if repo_root is None:
        # https://github.com/bazelbuild/bazel/issues/3325
        repo_root = os.environ.get("BUILD_WORKING_DIRECTORY", os.getcwd())
    if not os.path.isdir(repo_root):
        raise Exception("repository root is not a directory: [%s]" % repo_root)
    return repo_root


def to_tuple(thing):
    """
    Converts a comma separated string, a list or a tuple to a tuple of
    non-empty, stripped strings.
    """
    if isinstance(thing, tuple):
        return thing
    elif isinstance(thing, list):
        return tuple(thing)
    elif isinstance(thing, str):
        tokens = thing.split(",")
        return tuple([t.strip() for t in tokens if len(t.strip()) > 0])
    raise Exception("Cannot convert to tuple [%s]" % (thing,))


def read_file(path, must_exist=True):
    if not must_exist and not os.path.exists(path):
        return None
    with open(path, "r") as f:
        return f.read()


def write_file(path, content):
    with open(path, "w") as f:
        f.write(content)
