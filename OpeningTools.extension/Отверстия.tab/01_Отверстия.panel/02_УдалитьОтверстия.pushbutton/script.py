# -*- coding: utf-8 -*-
"""Delete openings placed by Opening Tools (by Comments tag)."""
from pyrevit import forms, revit, script

import config_loader
import rollback_utils


doc = revit.doc
output = script.get_output()


def main():
    rules = config_loader.load_rules()
    prefix = rules.get('comment_tag') or rollback_utils.DEFAULT_TAG_PREFIX

    tags = rollback_utils.get_unique_tags(doc, prefix=prefix)
    if not tags:
        forms.alert(
            u'Не найдено отверстий с тегом {0}.'.format(prefix),
            title=u'Нет элементов для удаления',
            warn_icon=False
        )
        return

    options = [rollback_utils.group_label(tool, count, prefix) for tool, count in tags]
    picked = forms.SelectFromList.show(
        options,
        title=u'Какие отверстия удалить?',
        multiselect=True,
        button_name=u'Удалить'
    )
    if not picked:
        return

    elements = rollback_utils.find_elements_for_labels(doc, tags, picked, prefix=prefix)

    if not forms.alert(
            u'Удалить {0} отверстий?'.format(len(elements)),
            title=u'Подтверждение',
            yes=True, no=True):
        return

    deleted = rollback_utils.delete_elements(doc, elements)
    output.print_md(u'**Удалено отверстий:** {0}'.format(deleted))
    output.print_md(u'*Ctrl+Z для отмены (до сохранения файла).*')


if __name__ == '__main__':
    main()
