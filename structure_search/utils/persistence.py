"""
XML persistence of selection algorithm settings and results
"""

import warnings
import xml.etree.ElementTree as ET
from dataclasses import fields
from enum import Enum
from pathlib import Path
from typing import List, Optional

import numpy as np

from ..core import SelectionConfig, SelectionResults


def to_camel(name: str) -> str:
    return ''.join(part.capitalize() for part in name.split('_'))


def format_value(value) -> str:
    if isinstance(value, bool):
        return '1' if value else '0'
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, float):
        return repr(float(value))
    return str(value)


def parse_value(text: Optional[str], current):
    """Parse ``text`` into the type of ``current``; raises ValueError when malformed"""
    text = (text or '').strip()
    if isinstance(current, bool):
        if text not in ('0', '1'):
            raise ValueError(f"Expected 0 or 1, got {text!r}")
        return text == '1'
    if isinstance(current, Enum):
        return type(current)(text)
    if isinstance(current, int):
        return int(text)
    if isinstance(current, float):
        return float(text)
    return text


def config_to_element(config: SelectionConfig, root_name: str) -> ET.Element:
    root = ET.Element(root_name)
    for f in fields(config):
        ET.SubElement(root, to_camel(f.name)).text = format_value(getattr(config, f.name))
    return root


def config_from_element(config: SelectionConfig, root: ET.Element) -> List[str]:
    """Apply every child element found under ``root`` to ``config``.

    Missing elements leave the option untouched. A malformed or rejected value
    is reported with a warning and the remaining options are still loaded.
    """
    errors, pending = [], []
    for f in fields(config):
        element = root.find(to_camel(f.name))
        if element is None:
            continue
        try:
            value = parse_value(element.text, getattr(config, f.name))
        except ValueError as e:
            errors.append(f"{to_camel(f.name)}: {e}")
            continue
        if config.set(f.name, value):
            pending.append((f.name, value))

    # options checked against each other (elitism vs population, order range,
    # crossover points) may only become valid once other options are applied
    while pending:
        retry, pending = pending, []
        for name, value in retry:
            error = config.set(name, value)
            if error:
                pending.append((name, value, error))
        if len(pending) == len(retry):
            break
        pending = [(name, value) for name, value, _ in pending]
    errors.extend(f"{to_camel(name)}: {error}" for name, _, error in pending)

    for error in errors:
        warnings.warn(error)
    return errors


def _format_structure(structure) -> str:
    if structure is None:
        return ''
    if isinstance(structure, np.ndarray):
        return ' '.join('1' if b else '0' for b in structure)
    return str(structure)


def results_to_element(results: SelectionResults) -> ET.Element:
    o = results.outcome
    root = ET.Element('Results')
    ET.SubElement(root, 'StoppingCondition').text = o.stopping_condition.value
    ET.SubElement(root, 'OptimalStructure').text = _format_structure(o.optimal_structure)
    ET.SubElement(root, 'FinalPerformance').text = format_value(float(o.final_training_performance))
    ET.SubElement(root, 'FinalGeneralizationPerformance').text = \
        format_value(float(o.final_generalization_performance))
    ET.SubElement(root, 'IterationsNumber').text = str(int(o.iterations_number))
    ET.SubElement(root, 'ElapsedTime').text = format_value(float(o.elapsed_time))
    if o.minimal_parameters is not None:
        ET.SubElement(root, 'MinimalParameters').text = ' '.join(repr(float(p)) for p in o.minimal_parameters)
    return root


def write_document(root: ET.Element, filepath: str):
    Path(filepath).parent.mkdir(parents=True, exist_ok=True)
    tree = ET.ElementTree(root)
    ET.indent(tree)
    tree.write(filepath, encoding='utf-8', xml_declaration=True)


def read_document(filepath: str, root_name: str) -> ET.Element:
    try:
        root = ET.parse(filepath).getroot()
    except (OSError, ET.ParseError) as e:
        raise ValueError(f"Cannot load XML file {filepath}: {e}") from e
    return find_root(root, root_name)


def find_root(root: ET.Element, root_name: str) -> ET.Element:
    element = root if root.tag == root_name else root.find(root_name)
    if element is None:
        raise ValueError(f"{root_name} element is missing")
    return element
