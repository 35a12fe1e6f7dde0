"""
Copyright (c) 2025, salesforce.com, inc.
All rights reserved.
SPDX-License-Identifier: BSD-3-Clause
For full license text, see the LICENSE file in the repo root or https://opensource.org/licenses/BSD-3-Clause


Responsible for loading the .nontransitiverc config file.
"""


from nontransitive.common import common
from nontransitive.common import logger
import configparser
import os


CONFIG_FILE_NAME = ".nontransitiverc"


def load(repo_root, verbose=False):
    """
    Looks for a config file called .nontransitiverc in the following
    locations:
      - <repo_root>/tools/etc/.nontransitiverc
      - <repo_root>/tools/.nontransitiverc
      - <repo_root>/.nontransitiverc

    If no config file is found, uses default values.

    Returns a Config instance.
    """
    parser = configparser.RawConfigParser()

    def gen(option, dflt, valid_values=None):
        """Read from [general] section """
        return _get_value_from_config(parser, "general", option, dflt, valid_values)

    def policy(option, dflt, valid_values=None):
        """Read from [policy] section """
        return _get_value_from_config(parser, "policy", option, dflt, valid_values)

    search_locations = ("tools/etc", "tools", ".")
    for loc in search_locations:
        cfg_path = os.path.join(repo_root, loc, CONFIG_FILE_NAME)
        if os.path.exists(cfg_path):
            with open(cfg_path, 'r') as f:
                parser.read_file(f)
            if verbose:
                logger.info("Loading configuration at [%s]" % cfg_path)
            break

    cfg = Config(
        maven_install_paths=gen("maven_install_paths", ("maven_install.json",)),
        transitive_groups=policy("transitive_groups", ()),
        fail_on_version_conflict=policy("fail_on_version_conflict", True,
            valid_values=("true", "false", "on", "off", "1", "0")),
    )

    if verbose:
        logger.raw("Running with configuration:\n%s\n" % str(cfg))

    return cfg


def _get_value_from_config(parser, section, option, dflt, valid_values):
    try:
        value = parser.get(section, option)
        if valid_values is not None and value.lower() not in valid_values:
            raise Exception("Invalid value for %s.%s [%s] - valid values are: %s" % (section, option, value, valid_values))
        return value
    except configparser.NoOptionError:
        return dflt
    except configparser.NoSectionError:
        return dflt


class Config:

    def __init__(self,
        maven_install_paths=(),
        transitive_groups=(),
        fail_on_version_conflict=True):

        # general
        self.maven_install_paths = common.to_tuple(maven_install_paths)

        # policy
        self.transitive_groups = common.to_tuple(transitive_groups)
        self._fail_on_version_conflict = _to_bool(fail_on_version_conflict)

    @property
    def fail_on_version_conflict(self):
        return self._fail_on_version_conflict

    def with_additional_transitive_groups(self, groups):
        """
        Returns a new Config instance, with the specified groups added to the
        configured transitive_groups.
        """
        groups = common.to_tuple(groups)
        all_groups = self.transitive_groups + tuple(
            [g for g in groups if g not in self.transitive_groups])
        return Config(self.maven_install_paths, all_groups,
                      self._fail_on_version_conflict)

    def get_maven_install_names_and_paths(self, repo_root):
        """
        Returns an iterable of tuples (name, absolute path) of the configured
        pinned files. The name is the filename without its extension, it is
        only used for logging.
        """
        names_and_paths = []
        for rel_path in self.maven_install_paths:
            path = os.path.join(repo_root, rel_path)
            if not os.path.exists(path):
                raise Exception("pinned file not found at [%s]" % path)
            name = os.path.splitext(os.path.basename(path))[0]
            names_and_paths.append((name, path))
        return names_and_paths

    def __str__(self):
        return """[general]
maven_install_paths=%s

[policy]
transitive_groups=%s
fail_on_version_conflict=%s
""" % (self.maven_install_paths,
       self.transitive_groups,
       self.fail_on_version_conflict)


def _to_bool(thing):
    if isinstance(thing, bool):
        return thing
    if isinstance(thing, int):
        return False if thing == 0 else True
    if isinstance(thing, str):
        return True if thing.lower() in ("true", "on", "1") else False
    raise Exception("Cannot convert to bool [%s]" % thing)
