# -*- coding: utf-8 -*-
"""Tests for hole_orchestrator: a full run against mock documents."""
import unittest
from datetime import datetime
from unittest.mock import MagicMock

import config_loader
import hole_core
import hole_orchestrator
import rollback_utils
from link_reader import SourceModel
from mocks.revit_api import (
    DB,
    MockArc,
    MockFamilyInstance,
    MockFamilySymbol,
    MockLevel,
    MockPipe,
    MockTransform,
    MockView3D,
    MockWall,
    MockXYZ,
    mock_document,
    mock_duct,
    mock_hit,
    mock_pipe,
)

SIZE_PARAMS = (u'Ширина', u'Высота')


def _rules(**overrides):
    rules = dict(config_loader.DEFAULTS)
    rules.update(overrides)
    return rules


def _walls_along_axes(origin, direction):
    """Wall 7 crosses the X axis at 3 ft (two faces), wall 8 crosses Y at 2 ft."""
    if abs(direction.X) > 0.5:
        return [mock_hit(7, 3.2), mock_hit(7, 3.0), mock_hit(9, 25.0)]
    return [mock_hit(8, 2.0)]


class TestRun(unittest.TestCase):
    def setUp(self):
        self.symbol = MockFamilySymbol(1, u'Отверстие', u'Прямоугольное')
        self.view = MockView3D(50, ray_hits=_walls_along_axes)
        self.doc = mock_document(u'АР', [
            MockLevel(30, 0.0),
            MockWall(7, 30),
            MockWall(8, 30),
            MockWall(9, 30),
            self.symbol,
            self.view,
        ], size_params=SIZE_PARAMS)
        self.duct_doc = mock_document(u'ОВ', [mock_duct(201, (0, 0, 0), (0, 10, 0), width=0.4, height=0.6)])
        self.pipe_doc = mock_document(u'ВК', [mock_pipe(301, (0, 0, 0), (10, 0, 0), diameter=0.2)])
        self.ducts = SourceModel(self.duct_doc, u'ОВ')
        self.pipes = SourceModel(self.pipe_doc, u'ВК')

    def _openings(self):
        return [e for e in self.doc.elements() if isinstance(e, MockFamilyInstance)]

    def test_places_one_opening_per_crossed_wall(self):
        summary = hole_orchestrator.run(self.doc, _rules(), self.ducts, self.pipes, self.symbol, self.view)
        self.assertEqual(summary, {'elements': 2, 'planned': 2, 'placed': 2, 'skipped': 0, 'failed': 0})

        by_host = dict((o.Host.Id.IntegerValue, o) for o in self._openings())
        self.assertEqual(sorted(by_host), [7, 8])
        self.assertEqual(by_host[7].point, MockXYZ(3.0, 0.0, 0.0))
        self.assertAlmostEqual(by_host[7].LookupParameter(u'Ширина').value, 0.3)
        self.assertAlmostEqual(by_host[8].LookupParameter(u'Ширина').value, 0.5)
        self.assertAlmostEqual(by_host[8].LookupParameter(u'Высота').value, 0.7)

    def test_single_transaction(self):
        hole_orchestrator.run(self.doc, _rules(), self.ducts, self.pipes, self.symbol, self.view)
        self.assertEqual(self.doc.transactions, [
            (hole_orchestrator.TRANSACTION_NAME, 'start'),
            (hole_orchestrator.TRANSACTION_NAME, 'commit'),
        ])

    def test_openings_are_tagged_by_kind(self):
        hole_orchestrator.run(self.doc, _rules(), self.ducts, self.pipes, self.symbol, self.view)
        comments = [o.get_Parameter(DB.BuiltInParameter.ALL_MODEL_INSTANCE_COMMENTS).value
                    for o in self._openings()]
        tools = sorted(rollback_utils.parse_tag(c)["tool"] for c in comments)
        self.assertEqual(tools, ['DUCT', 'PIPE'])
        self.assertEqual(len(rollback_utils.find_tagged_elements(self.doc)), 2)

    def test_margin_from_millimetres(self):
        hole_orchestrator.run(self.doc, _rules(clearance_margin_mm=0.0),
                              None, self.pipes, self.symbol, self.view)
        opening = self._openings()[0]
        self.assertAlmostEqual(opening.LookupParameter(u'Ширина').value, 0.2)

    def test_link_transform_moves_openings(self):
        pipes = SourceModel(self.pipe_doc, u'ВК', MockTransform((0.0, 0.0, 5.0)), link_instance=object())
        hole_orchestrator.run(self.doc, _rules(), None, pipes, self.symbol, self.view)
        self.assertEqual(self._openings()[0].point, MockXYZ(3.0, 0.0, 5.0))

    def test_disabled_kind_is_not_read(self):
        summary = hole_orchestrator.run(self.doc, _rules(include_pipes=False),
                                        self.ducts, self.pipes, self.symbol, self.view)
        self.assertEqual(summary['elements'], 1)
        self.assertEqual(self._openings()[0].Host.Id.IntegerValue, 8)

    def test_curved_and_unknown_hits_are_skipped(self):
        self.pipe_doc.add(MockPipe(302, MockArc(MockXYZ(0, 0, 0), MockXYZ(1, 1, 0))))
        self.doc.Delete(8)
        summary = hole_orchestrator.run(self.doc, _rules(), self.ducts, self.pipes, self.symbol, self.view)
        self.assertEqual(summary['elements'], 3)
        self.assertEqual(summary['skipped'], 2)
        self.assertEqual(summary['placed'], 1)

    def test_limit(self):
        summary = hole_orchestrator.run(self.doc, _rules(max_place_count=1),
                                        self.ducts, self.pipes, self.symbol, self.view)
        self.assertEqual(summary['placed'], 1)
        self.assertEqual(summary['failed'], 1)

    def test_nothing_to_place_opens_no_transaction(self):
        self.view.ray_hits = lambda origin, direction: []
        summary = hole_orchestrator.run(self.doc, _rules(), self.ducts, self.pipes, self.symbol, self.view)
        self.assertEqual(summary['planned'], 0)
        self.assertEqual(self.doc.transactions, [])

    def test_report_written(self):
        output = MagicMock()
        self.pipe_doc.add(MockPipe(302, MockArc(MockXYZ(0, 0, 0), MockXYZ(1, 1, 0))))
        hole_orchestrator.run(self.doc, _rules(), self.ducts, self.pipes, self.symbol, self.view, output=output)
        lines = [c.args[0] for c in output.print_md.call_args_list]
        self.assertEqual(lines[0], u'# Расстановка отверстий')
        self.assertIn(u'**Семейство:** Отверстие : Прямоугольное', lines)
        self.assertIn(u'- Воздуховод: 1', lines)
        self.assertIn(u'- Труба: 1', lines)
        self.assertIn(u'## Пропущено элементов: 1', lines)


class TestCommentFactory(unittest.TestCase):
    def test_uses_configured_prefix_and_one_timestamp(self):
        spec = hole_core.OpeningSpec((0, 0, 0), hole_core.ObstacleId(None, 7), 0.3, 0.3, 1, hole_core.SERVICE_PIPE)
        comment_for = hole_orchestrator.make_comment_factory(
            {'comment_tag': 'KR_HOLE'}, now=datetime(2026, 10, 19, 9, 5, 0))
        self.assertEqual(comment_for(spec), 'KR_HOLE:PIPE:20261019_090500')

    def test_default_prefix(self):
        spec = hole_core.OpeningSpec((0, 0, 0), hole_core.ObstacleId(None, 7), 0.3, 0.3, 1, hole_core.SERVICE_DUCT)
        comment_for = hole_orchestrator.make_comment_factory({})
        self.assertTrue(comment_for(spec).startswith('AUTO_HOLE:DUCT:'))


class TestCollectElements(unittest.TestCase):
    def test_kinds_taken_from_their_own_source(self):
        # A pipe in the duct model is not collected
        duct_doc = mock_document(u'ОВ', [
            mock_duct(201, (0, 0, 0), (0, 10, 0), diameter=0.3),
            mock_pipe(202, (0, 0, 0), (1, 0, 0)),
        ])
        snapshots, skipped = hole_orchestrator.collect_elements(SourceModel(duct_doc, u'ОВ'), None)
        self.assertEqual([s.element_id for s in snapshots], [201])
        self.assertEqual(snapshots[0].section, hole_core.SECTION_ROUND)
        self.assertEqual(skipped, [])

    def test_no_sources(self):
        self.assertEqual(hole_orchestrator.collect_elements(None, None), ([], []))


if __name__ == '__main__':
    unittest.main()
