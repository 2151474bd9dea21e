"""
Tuning constants shared by the simulation core and the window shell.
"""

import math

# simulation space -> display space scale
VIRT_ZOOM = 10.0

# integration
SIM_DT = 0.001
DEFAULT_EQUATION = "lorenz"
DEFAULT_SUBSTEPS = 1
DEFAULT_DT_EXPONENT = 2.5
DT_EXPONENT_INCREMENT = 0.2
FIXED_TICK_HZ = 64.0

# spawning
CLUSTER_SIZE = 20

# camera
CAMERA_FOV = 1.2  # vertical, radians
CAMERA_RADIUS = 400.0
CAMERA_NEAR = 0.1
CAMERA_FAR = 100000.0

# window
WIDTH = 1280
HEIGHT = 720
MAX_FPS = 144

# rendering
PARTICLE_SIZE = 5.0
PARTICLE_COLOR = (0.96, 0.96, 0.96)
AXES_LENGTH = 100.0

# orbit sensitivity defaults
PAN_SENSITIVITY = 0.001  # 1000 pixels per world unit
ORBIT_SENSITIVITY = math.radians(0.1)  # 0.1 degree per pixel
ZOOM_SENSITIVITY = 0.01
SCROLL_LINE_SENSITIVITY = 16.0  # 1 "line" == 16 "pixels of motion"
SCROLL_PIXEL_SENSITIVITY = 1.0
