# -*- coding: utf-8 -*-
"""Загрузчик конфигурации для Opening Tools.

Читает правила расстановки отверстий из JSON и дополняет их значениями
по умолчанию. Совместим с IronPython 2.7 (pyRevit).
"""
import io
import json
import os

from utils_units import mm_to_ft


DEFAULT_MARGIN_FT = 0.1

DEFAULTS = {
    'comment_tag': 'AUTO_HOLE',
    'opening_family_name': u'Отверстие',
    'opening_type_name': u'',
    'opening_width_param': u'Ширина',
    'opening_height_param': u'Высота',
    'clearance_margin_ft': DEFAULT_MARGIN_FT,
    'clearance_margin_mm': None,
    # Точные имена документов (без учёта регистра и расширения .rvt).
    'duct_doc_titles': [],
    'pipe_doc_titles': [],
    'include_ducts': True,
    'include_pipes': True,
    'view3d_name': u'',
    'max_place_count': 2000,
}


def _extension_root_from_lib():
    """Корневая директория расширения по расположению lib."""
    return os.path.dirname(os.path.dirname(__file__))


def get_default_rules_path():
    return os.path.join(_extension_root_from_lib(), 'config', 'rules.default.json')


def _read_json(path):
    try:
        with io.open(path, 'r', encoding='utf-8') as fp:
            return json.load(fp)
    except ValueError:
        # Файлы из Блокнота Windows бывают с BOM.
        with open(path, 'rb') as fb:
            raw = fb.read()
        return json.loads(raw.decode('utf-8-sig'))


def load_rules(path=None):
    """Загрузить правила из JSON файла.

    Args:
        path: Путь к JSON файлу. Если None, используется файл по умолчанию.

    Returns:
        Словарь правил; отсутствующие ключи взяты из DEFAULTS.
    """
    data = _read_json(path or get_default_rules_path())
    if not isinstance(data, dict):
        raise ValueError('Rules file must contain a JSON object')

    for key, val in DEFAULTS.items():
        if key not in data:
            data[key] = list(val) if isinstance(val, list) else val
    return data


def get_margin_ft(rules):
    """Зазор в футах: clearance_margin_mm (если задан) важнее clearance_margin_ft."""
    rules = rules or {}
    mm = rules.get('clearance_margin_mm')
    if mm is not None:
        margin = mm_to_ft(mm)
    else:
        margin = rules.get('clearance_margin_ft', DEFAULT_MARGIN_FT)
        margin = DEFAULT_MARGIN_FT if margin is None else float(margin)
    if margin < 0:
        raise ValueError('Clearance margin must not be negative: {0}'.format(margin))
    return margin


def as_title_list(val):
    """Строка или список имён -> список непустых строк."""
    if val is None:
        return []
    if isinstance(val, (list, tuple)):
        return [v for v in val if v]
    return [val] if val else []
