# -*- coding: utf-8 -*-
"""Place wall openings where ducts (ОВ) and pipes (ВК) cross host walls."""

__title__ = u"Расставить\nотверстия"
__author__ = "Opening Tools Team"

from pyrevit import revit, script

import config_loader
import hole_orchestrator
import link_reader
import placement_engine
import ray_query
from utils_revit import alert, log_exception


doc = revit.doc
output = script.get_output()
logger = script.get_logger()


def main():
    rules = config_loader.load_rules()

    duct_src = None
    if rules.get('include_ducts', True):
        duct_src = link_reader.resolve_source(
            doc, config_loader.as_title_list(rules.get('duct_doc_titles')),
            u'Выберите модель ОВ (воздуховоды)')
        if duct_src is None:
            alert(u'Не найдена модель ОВ.')
            return

    pipe_src = None
    if rules.get('include_pipes', True):
        pipe_src = link_reader.resolve_source(
            doc, config_loader.as_title_list(rules.get('pipe_doc_titles')),
            u'Выберите модель ВК (трубы)')
        if pipe_src is None:
            alert(u'Не найдена модель ВК.')
            return

    symbol = placement_engine.find_opening_symbol(
        doc, rules.get('opening_family_name'), rules.get('opening_type_name'))
    if symbol is None:
        alert(u'Не найдено семейство "{0}" в категории "Обобщённые модели".\n\n'
              u'Загрузите семейство и повторите запуск.'.format(rules.get('opening_family_name')))
        return

    view3d = ray_query.find_3d_view(doc, rules.get('view3d_name'))
    if view3d is None:
        alert(u'Не найден 3D вид.')
        return

    logger.debug(u'Ducts: {0!r}, pipes: {1!r}'.format(duct_src, pipe_src))
    try:
        hole_orchestrator.run(doc, rules, duct_src, pipe_src, symbol, view3d, output=output)
    except Exception:
        log_exception(u'Расстановка отверстий прервана')
        alert(u'Расстановка отверстий прервана, изменения отменены.\nПодробности в журнале pyRevit.')


if __name__ == '__main__':
    main()
