"""Transform math for rotated node hit testing and manipulation.

All functions are pure and work in canvas pixel space (Y-down). Angles are
radians. Rotated hit testing is always "localize then AABB test": the pointer
is rotated by -rotation about the box center, never the box itself.
"""

import math

from models.transform import Vec2


def rotate_point_around(point, pivot, angle):
	"""Rotate a point about a pivot.

	Args:
		point: (x, y) or Vec2 to rotate
		pivot: (x, y) or Vec2 center of rotation
		angle: Rotation in radians (positive = clockwise on a Y-down canvas)

	Returns:
		Vec2: Rotated point
	"""
	px, py = point
	cx, cy = pivot
	dx = px - cx
	dy = py - cy
	cos_a = math.cos(angle)
	sin_a = math.sin(angle)
	return Vec2(cos_a * dx - sin_a * dy + cx, sin_a * dx + cos_a * dy + cy)


def localize_point(point, pivot, rotation):
	"""Map a canvas point into a node's unrotated frame.

	The pivot must be the same bounding box center that was used to place
	the node (or its handles) on screen.
	"""
	return rotate_point_around(point, pivot, -rotation)


def point_in_rect(point, rect):
	"""Inclusive AABB test. rect is anything with x, y, width, height."""
	px, py = point
	return (rect.x <= px <= rect.x + rect.width and
	        rect.y <= py <= rect.y + rect.height)


def bearing(origin, point):
	"""Absolute angle from origin to point (atan2, quadrant safe)."""
	ox, oy = origin
	px, py = point
	return math.atan2(py - oy, px - ox)


def distance(a, b):
	ax, ay = a
	bx, by = b
	return math.hypot(bx - ax, by - ay)


def fit_scale(content_w, content_h, target_w, target_h):
	"""Uniform shrink factor that fits content inside a target box.

	Never enlarges: content that already fits returns 1.0. The limiting
	axis is picked by comparing aspect ratios.

	Returns:
		float: Scale factor in (0, 1]
	"""
	if content_w <= 0 or content_h <= 0 or target_w <= 0 or target_h <= 0:
		return 1.0
	if content_w <= target_w and content_h <= target_h:
		return 1.0

	content_ratio = content_w / content_h
	target_ratio = target_w / target_h
	if content_ratio > target_ratio:
		# Wider than target - width limits
		return target_w / content_w
	# Taller than (or same shape as) target - height limits
	return target_h / content_h


def cover_rect(image_w, image_h, canvas_w, canvas_h):
	"""Rect that draws an image with 'object-fit: cover' semantics.

	The image fills the canvas completely, keeping its aspect ratio; the
	overflowing axis is centered and cropped by the canvas edges.

	Returns:
		tuple: (offset_x, offset_y, draw_w, draw_h)
	"""
	if image_w <= 0 or image_h <= 0 or canvas_w <= 0 or canvas_h <= 0:
		return 0.0, 0.0, float(canvas_w), float(canvas_h)

	image_ratio = image_w / image_h
	canvas_ratio = canvas_w / canvas_h

	if image_ratio > canvas_ratio:
		# Image is wider than the canvas
		draw_h = float(canvas_h)
		draw_w = canvas_h * image_ratio
		return (canvas_w - draw_w) / 2, 0.0, draw_w, draw_h

	# Image is taller than the canvas
	draw_w = float(canvas_w)
	draw_h = canvas_w / image_ratio
	return 0.0, (canvas_h - draw_h) / 2, draw_w, draw_h
