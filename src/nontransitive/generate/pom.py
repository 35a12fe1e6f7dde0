"""
Copyright (c) 2025, salesforce.com, inc.
All rights reserved.
SPDX-License-Identifier: BSD-3-Clause
For full license text, see the LICENSE file in the repo root or https://opensource.org/licenses/BSD-3-Clause

This module writes computed exclusions into pom.xml content.
"""

from lxml import etree
from nontransitive.generate import pomparser
import os
import re


_INDENT = pomparser.INDENT

_XML_DECLARATION_RE = re.compile(r"^\s*(<\?xml\b.*?\?>)", re.DOTALL)


class DependenciesGen:
    """
    Generates a <dependencies> section for the specified manifest entries
    (dependency.ManifestEntry instances), in the order of the entries.
    """
    def __init__(self, manifest_entries):
        self.manifest_entries = list(manifest_entries)

    def gen(self, indent=_INDENT):
        """
        Returns the generated <dependencies> section as a string.
        """
        content = ""
        content, indent = self._xml(content, "dependencies", indent)
        for entry in self.manifest_entries:
            content, indent = self._gen_dependency_element(entry.dependency, content, indent, close_element=not entry.has_exclusions)
            if entry.has_exclusions:
                group_and_artifact_ids = [(e.group_id, e.artifact_id) for e in entry.exclusions]
                content, indent = self._gen_exclusions(content, indent, group_and_artifact_ids)
                content, indent = self._xml(content, "dependency", indent, close_element=True)
        content, indent = self._xml(content, "dependencies", indent, close_element=True)
        return content

    def _xml(self, content, element, indent, value=None, close_element=False):
        if value is None:
            if close_element:
                return "%s%s</%s>%s" % (content, ' '*(indent - _INDENT), element, os.linesep), indent - _INDENT
            else:
                return "%s%s<%s>%s" % (content, ' '*indent, element, os.linesep), indent + _INDENT
        else:
            return "%s%s<%s>%s</%s>%s" % (content, ' '*indent, element, value, element, os.linesep), indent

    def _gen_dependency_element(self, dep, content, indent, close_element):
        """
        Generates a <dependency> element.

        Returns the generated content and the current identation level as a
        tuple: (content, indent)
        """
        content, indent = self._xml(content, "dependency", indent)
        content, indent = self._xml(content, "groupId", indent, dep.group_id)
        content, indent = self._xml(content, "artifactId", indent, dep.artifact_id)
        content, indent = self._xml(content, "version", indent, dep.version)
        if dep.classifier is not None:
            content, indent = self._xml(content, "classifier", indent, dep.classifier)
        if dep.scope is not None:
            content, indent = self._xml(content, "scope", indent, dep.scope)
        if close_element:
            content, indent = self._xml(content, "dependency", indent, close_element=True)
        return content, indent

    def _gen_exclusions(self, content, indent, group_and_artifact_ids):
        content, indent = self._xml(content, "exclusions", indent)
        for ga in group_and_artifact_ids:
            content, indent = self._xml(content, "exclusion", indent)
            content, indent = self._xml(content, "groupId", indent, ga[0])
            content, indent = self._xml(content, "artifactId", indent, ga[1])
            content, indent = self._xml(content, "exclusion", indent, close_element=True)
        content, indent = self._xml(content, "exclusions", indent, close_element=True)
        return content, indent


def add_exclusions(pom_content, manifest_entries):
    """
    Adds <exclusions> to the <dependency> elements of the specified pom
    content, for each manifest entry (dependency.ManifestEntry instance) that
    has exclusions. Exclusions that are already declared in the pom are kept,
    and are not added again.

    Returns the updated pom content. If there is nothing to add, the pom
    content is returned as is.
    """
    coord_to_exclusions = {}
    for entry in manifest_entries:
        if entry.has_exclusions:
            coord_to_exclusions[entry.coordinate] = entry.exclusions
    if len(coord_to_exclusions) == 0:
        return pom_content

    project_el = pomparser.parse_pom(pom_content, remove_blank_text=True)
    properties = pomparser.get_properties(project_el)
    updated = False
    for dep_el in pomparser.get_dependency_elements(project_el):
        parsed_dep = pomparser.get_dependency_from_xml_element(dep_el, properties)
        exclusions = coord_to_exclusions.get(parsed_dep.coordinate)
        if exclusions is not None:
            updated = _add_exclusion_elements(dep_el, exclusions) or updated
    if not updated:
        return pom_content

    etree.indent(project_el, space=' '*_INDENT)
    # the whole document, so comments, PIs and the DOCTYPE before <project>
    # are kept
    content = etree.tostring(project_el.getroottree(), encoding="unicode") + os.linesep
    declaration = _XML_DECLARATION_RE.match(pom_content)
    if declaration is not None:
        content = declaration.group(1) + os.linesep + content
    return content


def _add_exclusion_elements(dep_el, exclusions):
    """
    Returns True if at least one <exclusion> element was added.
    """
    exclusions_els = pomparser.find_children(dep_el, "exclusions")
    if len(exclusions_els) == 0:
        exclusions_el = None
        existing = set()
    else:
        exclusions_el = exclusions_els[0]
        existing = set()
        for exclusion_el in pomparser.find_children(exclusions_el, "exclusion"):
            group_id = _get_text(exclusion_el, "groupId")
            artifact_id = _get_text(exclusion_el, "artifactId")
            existing.add((group_id, artifact_id))

    added = False
    for exclusion in exclusions:
        if (exclusion.group_id, exclusion.artifact_id) in existing:
            continue
        if exclusions_el is None:
            exclusions_el = etree.SubElement(dep_el, _qname(dep_el, "exclusions"))
        exclusion_el = etree.SubElement(exclusions_el, _qname(dep_el, "exclusion"))
        etree.SubElement(exclusion_el, _qname(dep_el, "groupId")).text = exclusion.group_id
        etree.SubElement(exclusion_el, _qname(dep_el, "artifactId")).text = exclusion.artifact_id
        added = True
    return added


def _qname(el, name):
    """
    Returns the name of a new element, in the namespace of the specified
    element.
    """
    ns = etree.QName(el).namespace
    return name if ns is None else "{%s}%s" % (ns, name)


def _get_text(el, name):
    children = pomparser.find_children(el, name)
    if len(children) == 0 or children[0].text is None:
        return None
    return children[0].text.strip()
