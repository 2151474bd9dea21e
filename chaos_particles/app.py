"""
Chaos particles - pygame + PyOpenGL window around the simulation.
Hold the left mouse button to spawn particles under the cursor.
"""

import logging
import math

import numpy as np
import pygame
from pygame.locals import *
from OpenGL.GL import *
from OpenGL.GLU import *

from . import config
from .camera import FrameInput, ScrollEvent, ScrollUnit

logger = logging.getLogger(__name__)


def init_gl(width, height):
    """Initialize OpenGL settings"""
    glClearColor(0.0, 0.0, 0.0, 1.0)
    glEnable(GL_DEPTH_TEST)
    glEnable(GL_POINT_SMOOTH)
    glEnable(GL_BLEND)
    glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)
    glPointSize(config.PARTICLE_SIZE)
    glLineWidth(1.5)
    glViewport(0, 0, width, height)


def set_camera(camera, width, height):
    glMatrixMode(GL_PROJECTION)
    glLoadIdentity()
    gluPerspective(math.degrees(camera.fov), width / height, config.CAMERA_NEAR, config.CAMERA_FAR)
    glMatrixMode(GL_MODELVIEW)
    # numpy is row-major, OpenGL wants column-major
    glLoadMatrixd(np.ascontiguousarray(camera.transform.view_matrix().T))


def draw_axes():
    length = config.AXES_LENGTH
    glBegin(GL_LINES)
    for axis, color in ((0, (1.0, 0.0, 0.0)), (1, (0.0, 1.0, 0.0)), (2, (0.0, 0.0, 1.0))):
        end = [0.0, 0.0, 0.0]
        end[axis] = length
        glColor3f(*color)
        glVertex3f(0.0, 0.0, 0.0)
        glVertex3f(*end)
    glEnd()


def draw_particles(positions):
    if len(positions) == 0:
        return
    # diverged particles are skipped, not drawn at infinity
    points = np.ascontiguousarray(positions[np.isfinite(positions).all(axis=1)])
    glColor3f(*config.PARTICLE_COLOR)
    glEnableClientState(GL_VERTEX_ARRAY)
    glVertexPointer(3, GL_DOUBLE, 0, points)
    glDrawArrays(GL_POINTS, 0, len(points))
    glDisableClientState(GL_VERTEX_ARRAY)


def draw_scene(simulation, width, height):
    glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)
    set_camera(simulation.camera, width, height)
    draw_axes()
    draw_particles(simulation.display_positions())


def scroll_event(event):
    """pygame MOUSEWHEEL -> ScrollEvent; touch devices report smooth pixel scrolling."""
    if getattr(event, "touch", False):
        x = getattr(event, "precise_x", event.x)
        y = getattr(event, "precise_y", event.y)
        return ScrollEvent(ScrollUnit.PIXEL, float(x), float(y))
    return ScrollEvent(ScrollUnit.LINE, float(event.x), float(event.y))


def run(simulation, width=config.WIDTH, height=config.HEIGHT):
    """Main loop"""
    pygame.init()
    pygame.display.set_mode((width, height), DOUBLEBUF | OPENGL | RESIZABLE)
    pygame.display.set_caption("Chaos Particles")
    init_gl(width, height)

    clock = pygame.time.Clock()
    held = set()
    running = True

    logger.info("Running %s. Press ESC or Q to quit.", simulation.sim.describe())

    try:
        while running:
            motion = []
            scroll = []
            just_pressed = set()

            for event in pygame.event.get():
                if event.type == QUIT:
                    running = False
                elif event.type == KEYDOWN:
                    name = pygame.key.name(event.key)
                    held.add(name)
                    just_pressed.add(name)
                elif event.type == KEYUP:
                    held.discard(pygame.key.name(event.key))
                elif event.type == MOUSEMOTION:
                    motion.append(event.rel)
                elif event.type == MOUSEWHEEL:
                    scroll.append(scroll_event(event))
                elif event.type == VIDEORESIZE:
                    width, height = max(event.w, 1), max(event.h, 1)
                    glViewport(0, 0, width, height)
                elif event.type == pygame.WINDOWFOCUSLOST:
                    held.clear()

            if not running:
                break

            elapsed = clock.tick(config.MAX_FPS) / 1000.0
            cursor = pygame.mouse.get_pos() if pygame.mouse.get_focused() else None
            frame = FrameInput(
                motion=motion,
                scroll=scroll,
                pressed=frozenset(held),
                just_pressed=frozenset(just_pressed),
            )
            running = simulation.frame(
                frame,
                elapsed,
                cursor=cursor,
                viewport=(width, height),
                spawning=pygame.mouse.get_pressed()[0],
            )

            draw_scene(simulation, width, height)
            pygame.display.set_caption(simulation.stats(clock.get_fps()))
            pygame.display.flip()
    finally:
        pygame.quit()
