# -*- coding: utf-8 -*-
import math

import numpy as np
import pytest

from meshpreview.math import Vec3, Vec4, Mat4
from meshpreview.scene import Camera, ProjectionType


def _prime(cam):
    return cam.get_view_matrix(), cam.get_projection_matrix()


# ----------------------------------------------------------------------
#   Матрицы
# ----------------------------------------------------------------------
def test_look_at_moves_target_in_front_of_eye(camera):
    view = camera.get_view_matrix()
    res = view @ Vec4(0, 0, 0, 1)
    assert np.allclose(res.as_np(), [0, 0, -5, 1], atol=1e-6)


def test_right_vector_of_look_at(camera):
    assert np.allclose(camera.right_vector().as_np(), [1, 0, 0], atol=1e-6)


def test_look_at_with_up_parallel_to_view_direction():
    cam = Camera(position=Vec3(0, 5, 0), target=Vec3(0, 0, 0))
    view = cam.get_view_matrix()
    assert np.all(np.isfinite(view.to_np()))
    assert np.allclose((view @ Vec4(0, 0, 0, 1)).as_np(), [0, 0, -5, 1], atol=1e-6)


def test_perspective_frustum_edges():
    cam = Camera(horizontal_resolution=100, vertical_resolution=100,
                 vertical_field_of_view=90, near_clipping_plane=0.1,
                 far_clipping_plane=100)
    proj = cam.get_projection_matrix()
    for sign in (1.0, -1.0):
        clip = proj @ Vec4(sign * 0.1, 0.0, -0.1, 1.0)
        assert math.isclose(clip.w, 0.1, rel_tol=1e-5)
        assert math.isclose(clip.x, sign * clip.w, rel_tol=1e-5)
        assert math.isclose(clip.z, -clip.w, rel_tol=1e-4)


def test_orthographic_extent_uses_focus_plane_and_fov():
    cam = Camera(horizontal_resolution=200, vertical_resolution=100,
                 vertical_field_of_view=90, near_clipping_plane=1,
                 far_clipping_plane=11, orthographic_focus_plane=2,
                 projection="orthographic")
    proj = cam.get_projection_matrix()
    # half_height = 2 * tan(45°) = 2, half_width = 2 * aspect = 4
    assert np.allclose((proj @ Vec4(4, 2, -1, 1)).as_np(), [1, 1, -1, 1], atol=1e-6)


def test_orthographic_extent_with_narrower_fov():
    cam = Camera(horizontal_resolution=100, vertical_resolution=100,
                 vertical_field_of_view=60, near_clipping_plane=1,
                 far_clipping_plane=11, orthographic_focus_plane=3,
                 projection="orthographic")
    proj = cam.get_projection_matrix()
    # half_height = 3 * tan(30°) = sqrt(3)
    edge = math.sqrt(3.0)
    assert np.allclose((proj @ Vec4(edge, edge, -1, 1)).as_np(), [1, 1, -1, 1], atol=1e-5)


def test_orthographic_without_focus_plane_is_finite():
    cam = Camera(projection=ProjectionType.ORTHOGRAPHIC)
    proj = cam.get_projection_matrix()
    assert np.all(np.isfinite(proj.to_np()))
    assert not cam.projection_matrix_stale


def test_orthographic_zero_focus_falls_back_to_eye_distance():
    top_down = Camera(position=Vec3(0, 5, 0), target=Vec3(0, 0, 0),
                      projection="orthographic")
    focused = Camera(position=Vec3(0, 5, 0), target=Vec3(0, 0, 0),
                     orthographic_focus_plane=5, projection="orthographic")
    assert np.allclose(top_down.get_projection_matrix().to_np(),
                       focused.get_projection_matrix().to_np())


def test_free_look_is_eye_translation_without_rotation():
    cam = Camera(position=Vec3(1, 2, 3))
    assert np.allclose(cam.get_view_matrix().to_np(), Mat4.translate(-1, -2, -3).to_np())


def test_free_look_uses_rotation():
    cam = Camera(rotation=Vec3(0, 90, 0))
    # yaw 90° – камера смотрит вдоль -X
    res = cam.get_view_matrix() @ Vec4(-1, 0, 0, 1)
    assert np.allclose(res.as_np(), [0, 0, -1, 1], atol=1e-6)


# ----------------------------------------------------------------------
#   Кэш
# ----------------------------------------------------------------------
def test_matrices_are_cached(camera):
    v1, p1 = _prime(camera)
    v2, p2 = _prime(camera)
    assert v1 == v2 and p1 == p2
    assert camera.view_matrix_updates == 1
    assert camera.projection_matrix_updates == 1


def test_returned_matrix_does_not_alias_cache(camera):
    v1 = camera.get_view_matrix()
    v1.m[:] = 0.0
    assert camera.get_view_matrix() != v1


MUTATIONS = [
    ("resolution", lambda c: c.set_resolution(1280, 720), True, True),
    ("fov", lambda c: c.set_vertical_field_of_view(60), False, True),
    ("clipping", lambda c: c.set_clipping_planes(0.5, 50), False, True),
    ("near", lambda c: c.set_near_clipping_plane(0.5), False, True),
    ("far", lambda c: c.set_far_clipping_plane(50), False, True),
    ("focus_plane", lambda c: c.set_orthographic_focus_plane(3), False, True),
    ("position", lambda c: c.set_position(Vec3(1, 2, 3)), True, True),
    ("rotation", lambda c: c.set_rotation(Vec3(10, 0, 0)), True, True),
    ("up", lambda c: c.set_up_direction(Vec3(1, 1, 0)), True, False),
    ("target", lambda c: c.set_target(Vec3(1, 0, 0)), True, False),
    ("target_cleared", lambda c: c.set_target(None), True, False),
    ("projection", lambda c: c.set_projection_mode("orthographic"), False, True),
]


@pytest.mark.parametrize("name,mutate,view_stale,proj_stale", MUTATIONS,
                         ids=[m[0] for m in MUTATIONS])
def test_mutation_stales_exactly_dependent_matrices(camera, name, mutate, view_stale, proj_stale):
    view_before, proj_before = _prime(camera)
    mutate(camera)
    assert camera.view_matrix_stale is view_stale
    assert camera.projection_matrix_stale is proj_stale

    view_after, proj_after = _prime(camera)
    assert camera.view_matrix_updates == 1 + view_stale
    assert camera.projection_matrix_updates == 1 + proj_stale
    if not view_stale:
        assert view_after.to_np().tobytes() == view_before.to_np().tobytes()
    if not proj_stale:
        assert proj_after.to_np().tobytes() == proj_before.to_np().tobytes()


@pytest.mark.parametrize("name,matrix_changes", [
    ("position", lambda c: c.set_position(Vec3(1, 2, 3))),
    ("up", lambda c: c.set_up_direction(Vec3(1, 1, 0))),
    ("target", lambda c: c.set_target(Vec3(1, 0, 0))),
])
def test_view_changes_after_view_mutation(camera, name, matrix_changes):
    before = camera.get_view_matrix()
    matrix_changes(camera)
    assert camera.get_view_matrix() != before


def test_setting_same_values_is_noop(camera):
    _prime(camera)
    camera.set_resolution(800, 600)
    camera.set_vertical_field_of_view(camera.vertical_field_of_view)
    camera.set_clipping_planes(camera.near_clipping_plane, camera.far_clipping_plane)
    camera.set_orthographic_focus_plane(5.0)
    camera.set_position(Vec3(0, 0, 5))
    camera.set_rotation(Vec3())
    camera.set_up_direction(Vec3(0, 1, 0))
    camera.set_target(Vec3(0, 0, 0))
    camera.set_projection_mode(ProjectionType.PERSPECTIVE)
    assert not camera.view_matrix_stale
    assert not camera.projection_matrix_stale
    _prime(camera)
    assert camera.view_matrix_updates == 1
    assert camera.projection_matrix_updates == 1


def test_absent_target_set_to_none_is_noop():
    cam = Camera()
    cam.get_view_matrix()
    cam.set_target(None)
    assert not cam.view_matrix_stale


def test_property_assignment_goes_through_setters(camera):
    _prime(camera)
    camera.up_direction = Vec3(0, 1, 0)
    assert not camera.view_matrix_stale
    camera.position = Vec3(0, 1, 5)
    assert camera.view_matrix_stale and camera.projection_matrix_stale


def test_returned_vectors_are_copies(camera):
    _prime(camera)
    pos = camera.position
    pos.x = 100.0
    assert camera.position == Vec3(0, 0, 5)
    assert not camera.view_matrix_stale


def test_mark_stale_forces_recompute(camera):
    _prime(camera)
    camera.mark_stale()
    _prime(camera)
    assert camera.view_matrix_updates == 2
    assert camera.projection_matrix_updates == 2


def test_toggle_projection(camera):
    camera.toggle_projection()
    assert camera.projection == ProjectionType.ORTHOGRAPHIC
    camera.toggle_projection()
    assert camera.projection == ProjectionType.PERSPECTIVE


# ----------------------------------------------------------------------
#   Предусловия
# ----------------------------------------------------------------------
@pytest.mark.parametrize("mutate", [
    lambda c: c.set_resolution(0, 600),
    lambda c: c.set_resolution(800, -1),
    lambda c: c.set_resolution(float("nan"), 600),
    lambda c: c.set_vertical_field_of_view(0),
    lambda c: c.set_vertical_field_of_view(180),
    lambda c: c.set_clipping_planes(10, 10),
    lambda c: c.set_near_clipping_plane(200),
    lambda c: c.set_far_clipping_plane(-1),
    lambda c: c.set_orthographic_focus_plane(-1),
    lambda c: c.set_position(Vec3(0, 0, 0)),
    lambda c: c.set_position(Vec3(float("inf"), 0, 0)),
    lambda c: c.set_up_direction(Vec3()),
    lambda c: c.set_target(Vec3(0, 0, 5)),
    lambda c: c.set_projection_mode("fisheye"),
])
def test_invalid_mutation_is_rejected_without_state_change(camera, mutate):
    view, proj = _prime(camera)
    with pytest.raises(ValueError):
        mutate(camera)
    assert not camera.view_matrix_stale
    assert not camera.projection_matrix_stale
    assert camera.get_view_matrix() == view
    assert camera.get_projection_matrix() == proj


def test_constructor_validates():
    with pytest.raises(ValueError):
        Camera(near_clipping_plane=5, far_clipping_plane=1)
    with pytest.raises(ValueError):
        Camera(position=Vec3(1, 1, 1), target=Vec3(1, 1, 1))
