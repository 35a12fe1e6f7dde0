"""
Copyright (c) 2025, salesforce.com, inc.
All rights reserved.
SPDX-License-Identifier: BSD-3-Clause
For full license text, see the LICENSE file in the repo root or https://opensource.org/licenses/BSD-3-Clause


Reads transitive closures out of rules_jvm_external pinned files
(maven_install.json).
"""


from nontransitive.common import logger
from nontransitive.resolve import closures
from nontransitive.resolve import dependency
import json


def load_closures(names_and_paths, verbose=False):
    """
    Parses the given pinned files and returns a closures.ClosureRegistry
    with the transitive closure of every artifact they contain.
    """
    registry = closures.ClosureRegistry(verbose)
    for coord, transitives in parse_maven_install(names_and_paths, verbose):
        registry.register_transitives(coord, transitives)
    if verbose:
        logger.debug("Loaded the transitive closures of %i artifacts" % len(registry))
    return registry


def parse_maven_install(names_and_paths, verbose=False):
    """
    Parses the given maven_install pinned json files.

    Returns the parsed artifacts, as a list of tuples:
      - t[0]: a dependency.Coordinate instance
      - t[1]: for the coordinate at t[0], a list of the coordinates it
              references (the full transitive closure, without t[0] itself)
    """
    coord_and_transitives = []
    for name, pinned_file_path in names_and_paths:
        for dep in _parse_pinned(name, pinned_file_path, verbose):
            transitives = [t.coordinate for t in dep.get_transitive_closure()]
            coord_and_transitives.append((dep.coordinate, transitives,))
    return coord_and_transitives


def _parse_pinned(mvn_install_name, pinned_file_path, verbose=False):
    """
    Parses the maven_install pinned json file with the given name and path.

    Returns an iterable of _DepWithDirects instances, one for each top level
    artifact encountered in the pinned file.
    """
    if verbose:
        logger.debug("Processing pinned file [%s]" % pinned_file_path)
    with open(pinned_file_path, "r") as f:
        content = f.read()
    try:
        install_json = json.loads(content)
        all_artifacts_json = install_json["repositories"]
        artifacts_json = install_json["artifacts"]
        direct_deps_json = install_json.get("dependencies", {})
    except (ValueError, KeyError, TypeError) as e:
        raise Exception("cannot parse pinned file [%s]" % pinned_file_path) from e
    conflict_resolution = _parse_conflict_resolution(install_json)

    # collect top level artifacts and build a mapping of
    # coord without version -> _DepWithDirects instance
    # the coord without version is the lookup key used in the pinned file
    coord_wo_vers_to_dep = {}
    for repository_artifacts in all_artifacts_json.values():
        for coord_wo_vers in repository_artifacts:
            if coord_wo_vers in coord_wo_vers_to_dep:
                continue # listed by another repository
            art = dependency.parse_maven_art_str(coord_wo_vers + ":-1")
            if art.classifier == "sources":
                continue
            group_id_artifact_id = "%s:%s" % art.coordinate.ga
            if group_id_artifact_id not in artifacts_json:
                raise Exception("no version for [%s] in pinned file [%s]" % (coord_wo_vers, pinned_file_path))
            version = _get_version(artifacts_json[group_id_artifact_id])
            if version is None:
                raise Exception("cannot parse pinned file [%s]: no version for [%s]" % (pinned_file_path, coord_wo_vers))
            coord = dependency.new_coord_from_maven_art_str(
                "%s:%s" % (group_id_artifact_id, version))
            coord = conflict_resolution.get(coord, coord)
            coord_wo_vers_to_dep[coord_wo_vers] = _DepWithDirects(coord)

    # for each top level artifact, find and associate direct transitives
    for coord_wo_vers, dep in coord_wo_vers_to_dep.items():
        direct_dep_coords_wo_vers = direct_deps_json.get(coord_wo_vers, [])
        dep.directs = _get_direct_deps(direct_dep_coords_wo_vers,
                                       coord_wo_vers_to_dep, mvn_install_name,
                                       verbose)

    return coord_wo_vers_to_dep.values()


def _get_version(artifact_json):
    if not isinstance(artifact_json, dict):
        return None
    return artifact_json.get("version")


def _parse_conflict_resolution(install_json):
    """
    If there is a conflict_resolution attribute, we have to honor it: it maps
    the gav we want -> gav used in the rest of the file, with the only
    difference being the version.

    For example:
    "conflict_resolution": {
        "com.sun.jersey:jersey-client:1.17-ext": "com.sun.jersey:jersey-client:1.17"
    }

    This is returned as a lookup the other way:
    coordinate used in the pinned file -> coordinate we actually want
    """
    conflict_resolution = {}
    for wanted, actual in install_json.get("conflict_resolution", {}).items():
        wanted_coord = dependency.new_coord_from_maven_art_str(wanted)
        actual_coord = dependency.new_coord_from_maven_art_str(actual)
        assert actual_coord not in conflict_resolution
        conflict_resolution[actual_coord] = wanted_coord
    return conflict_resolution


def _get_direct_deps(direct_dep_coords_wo_vers, coord_wo_vers_to_dep,
                     mvn_install_name, verbose):
    direct_deps = []
    for direct_dep_coord_wo_vers in direct_dep_coords_wo_vers:
        direct_dep = coord_wo_vers_to_dep.get(direct_dep_coord_wo_vers)
        if direct_dep is None:
            for alt_coord_wo_vers in _get_alt_lookup_coords(direct_dep_coord_wo_vers):
                if alt_coord_wo_vers in coord_wo_vers_to_dep:
                    if verbose:
                        logger.debug("Found top level artifact in [%s] using alt coord [%s] instead of [%s]" %
                            (mvn_install_name, alt_coord_wo_vers, direct_dep_coord_wo_vers))
                    direct_dep = coord_wo_vers_to_dep[alt_coord_wo_vers]
                    break

        if direct_dep is not None:
            direct_deps.append(direct_dep)
        elif direct_dep_coord_wo_vers.endswith(":pom"):
            # ex: org.kie.modules:org-apache-commons-lang3:pom
            logger.warning("Direct dependency on a pom [%s] in [%s] is ignored" %
                (direct_dep_coord_wo_vers, mvn_install_name))
        else:
            raise Exception("Failed to find top level artifact in [%s] for direct dep coord [%s]" %
                (mvn_install_name, direct_dep_coord_wo_vers))
    return direct_deps


def _get_alt_lookup_coords(coord_wo_vers):
    """
    Covers the following observed edge cases in pinned files:
      - the reference uses "test-jar" packaging and the top level
        artifact has "jar" packaging with "tests" classifier.
    """
    alternate_coords = []
    art = dependency.parse_maven_art_str(coord_wo_vers + ":-1")
    if art.packaging == "test-jar":
        alternate_coords.append("%s:%s:jar:tests" % art.coordinate.ga)
    return alternate_coords


class _DepWithDirects:
    """
    Helper class to track an artifact with its direct transitives.
    Only the transitive closure is returned to callers, but while processing
    pinned files, storing this intermediate state is useful.
    """
    def __init__(self, coordinate):
        self.coordinate = coordinate
        self.directs = []

    def get_transitive_closure(self):
        transitive_closure = []
        _DepWithDirects._collect_directs(self, transitive_closure)
        return transitive_closure

    @classmethod
    def _collect_directs(clazz, current_dep, all_deps):
        for d in current_dep.directs:
            if d not in all_deps:
                all_deps.append(d)
                _DepWithDirects._collect_directs(d, all_deps)
