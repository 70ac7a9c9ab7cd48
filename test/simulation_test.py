import unittest

import numpy as np

from config import EffectConfig
from particle import ParticleField
from pointer import PointerTracker
from sampler import Canvas
from simulation import Simulation
from helpers import make_buffer, make_image


class SimulationTest(unittest.TestCase):

    def test_from_image_builds_field_and_clears_canvas(self):
        config = EffectConfig(width=4, height=2)
        canvas = Canvas.create(4, 2)
        simulation = Simulation.from_image(make_image(4, 2), canvas, config)

        self.assertEqual(8, len(simulation.field))
        self.assertTrue(all(p.color == (255, 0, 0) for p in simulation.field))
        self.assertEqual((0, 0, 0, 0), tuple(canvas.surface.get_at((1, 1))))

    def test_image_left_on_canvas_when_not_clearing(self):
        config = EffectConfig(width=4, height=2, clear_after_sample=False)
        canvas = Canvas.create(4, 2)
        Simulation.from_image(make_image(4, 2), canvas, config)
        self.assertEqual((255, 0, 0, 255), tuple(canvas.surface.get_at((1, 1))))

    def test_grayscale_portrait(self):
        config = EffectConfig(width=2, height=2, grayscale=True)
        simulation = Simulation.from_image(make_image(2, 2), Canvas.create(2, 2), config)
        self.assertTrue(all(p.color == (85, 85, 85) for p in simulation.field))

    def test_frame_updates_before_drawing(self):
        config = EffectConfig(width=4, height=4, ease=1.0, friction=0.0, radius=0)
        field = ParticleField(np.array([[0.0, 0.0]]), np.array([[0, 0, 255]]), 1.0)
        field.positions[0] = (3.0, 3.0)
        simulation = Simulation(field, config)
        canvas = Canvas.create(4, 4)
        canvas.fill_rect(2, 2, 1, 1, (1, 1, 1))

        simulation.frame(canvas)

        self.assertEqual(1, simulation.frames)
        self.assertEqual((0, 0, 255, 255), tuple(canvas.surface.get_at((0, 0))))
        self.assertEqual((0, 0, 0, 0), tuple(canvas.surface.get_at((3, 3))))
        self.assertEqual((0, 0, 0, 0), tuple(canvas.surface.get_at((2, 2))))

    def test_pointer_reaches_the_physics(self):
        config = EffectConfig(width=20, height=20, ease=0.0, friction=1.0, radius=10)
        field = ParticleField(np.array([[10.0, 10.0]]), np.array([[0, 0, 0]]), 1.0)
        tracker = PointerTracker()
        simulation = Simulation(field, config, tracker)
        self.assertIs(tracker.state, simulation.pointer)

        tracker.move(12, 10, 1, 0)
        simulation.step()

        self.assertAlmostEqual(5.0, field.positions[0, 0])

    def test_warp_is_seeded(self):
        config = EffectConfig(width=30, height=20, seed=5)
        first = Simulation(ParticleField.build(make_buffer(30, 20), config), config)
        second = Simulation(ParticleField.build(make_buffer(30, 20), config), config)

        first.warp()
        second.warp()

        np.testing.assert_array_equal(first.field.positions, second.field.positions)
        self.assertFalse(np.array_equal(first.field.positions, first.field.origins))

    def test_rebuild_replaces_field(self):
        config = EffectConfig(width=2, height=2)
        simulation = Simulation(ParticleField.build(make_buffer(2, 2), config), config)
        old_field = simulation.field

        simulation.rebuild(make_buffer(2, 2, (7, 8, 9, 255)))

        self.assertIsNot(old_field, simulation.field)
        self.assertEqual((7, 8, 9), simulation.field[0].color)


if __name__ == '__main__':
    unittest.main()
