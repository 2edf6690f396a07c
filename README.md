# physecs

Building blocks for a rigid body physics engine, written with NumPy.

## Conventions

Vectors are NumPy arrays of three floats. Quaternions are arrays laid out as
`[w, x, y, z]`. A 3×3 matrix stores its basis vectors as columns, so
`m[:, i]` is the i-th basis vector.

## Modules

### `physecs.mathutil`

- `quat_multiply(q0, q1)`: Hamilton product.
- `quat_rotate(q, v)`: rotate a vector by a unit quaternion.
- `quat_to_mat3(q)`: rotation matrix of a unit quaternion.
- `quat_normalize(q)`: unit-length copy; a zero quaternion becomes the identity.
- `quat_conjugate(q)`: the inverse rotation of a unit quaternion.
- `multiply_transpose(m, v)`: `m.T @ v`.
- `solve33(a, b)`: solves `a @ x = b` by Cramer's rule; a singular `a` gives
  a zero vector.
- `Transform`: dataclass with `position`, `orientation` and `scale`.

### `physecs.bounds`

`Bounds(min, max)` is an axis-aligned box with `center()`, `half_extents()`,
`area()` (surface area), `add_margin(margin)` (grows both corners) and
`expand(expansion)` (negative components move the lower corner, the others
move the upper corner).

### `physecs.bounds_util`

- `GeometryType` (`SPHERE`, `CAPSULE`, `BOX`, `CONVEX_MESH`, `TRIANGLE_MESH`)
  and `Geometry`, a shape record with `radius`, `half_height`, `half_extents`,
  `vertices` and `scale`; only the fields its type uses are read.
- `geometry_bounds(pos, ori, geometry)` dispatches to `bounds_sphere`,
  `bounds_capsule` (axis along local y), `bounds_box`, `bounds_convex_mesh`
  (scaled vertices) or `bounds_triangle_mesh`. `bounds_triangle(a, b, c)`
  bounds three points.
- `intersects(a, b)`: overlap test; touching boxes count as overlapping.
- `get_union(a, b)`: the smallest box holding both.

### `physecs.clipping`

- `suth_hodg_clip(polygon, clip)`: Sutherland–Hodgman clipping of a polygon
  by a convex polygon; returns the clipped points as a list of tuples.
- `clip_line(p0, p1, clip)`: clips a segment; returns the clipped end points,
  or `None` when nothing is left.

The clip polygon's interior lies to the right of each directed edge; points
exactly on an edge count as outside.

### `physecs.bvh`

`BVH` is a dynamic bounding volume hierarchy. `insert(entity, collider_index,
bounds)` finds the cheapest sibling by branch and bound on surface area,
then refits and rotates the ancestors; it returns the leaf's node id.
`update(node_id, bounds)` changes a leaf's bounds and refits, `remove(node_id)`
detaches a leaf and frees its slot and its parent's slot for reuse. The
`nodes` property lists every node slot (`BVHNode`), and `root_id` is the
root's index, or `-1` when the tree is empty.

### `physecs.collision`

- `ContactPoint(position0, position1)` and `ContactManifold(normal, points,
  triangle_index)`; the normal points from body 0 to body 1.
- `collision_sphere_sphere(pos0, radius0, pos1, radius1)` and
  `collision_sphere_box(pos0, radius0, pos1, or1, half_extents1)` return a
  manifold, or `None` when the shapes are apart. A sphere centred inside the
  box is pushed out through the nearest face.
- `flip_contacts(manifold)`: the same contact seen from the other body.

### `physecs.box_sat`

`box_box_axis(pos0, or0, half_extents0, pos1, or1, half_extents1)` runs the
fifteen-axis separating-axis test between two oriented boxes. It returns
`None` when the boxes are apart, otherwise a `BoxAxisResult` with the
`contact_type` (`BoxContactType.FACE` or `EDGE`), the signed `depth`, a unit
`normal` from the first box to the second, and the face (`box`, `axis`) or
edge pair (`edge0`, `edge1`). Edge axes win only when they beat the best face
axis by 0.1.

### `physecs.constraints`

- `DynamicBody`: inverse mass, velocities, world inverse inertia tensor and a
  kinematic flag. A body given as `None`, or a kinematic one, does not move.
- `Constraint1D` with `ConstraintFlags` (`SOFT`, `ANGULAR`, `LIMITED`):
  `prepare()` computes the effective mass and corrects a fifth of the
  position error, `solve(use_bias, time_step)` applies one impulse (with a
  spring-damper when `SOFT`, clamped between `lower` and `upper` when
  `LIMITED`), and `warm_start()` halves and reapplies the accumulated impulse.
- `ContactConstraints` with a list of `ContactPointConstraint`:
  `solve(use_bias, time_step)` runs the non-penetration rows, then the
  friction rows bounded by `friction` times the normal impulse.

## Example

```python
import numpy as np
from physecs.bounds import Bounds
from physecs.bvh import BVH

tree = BVH()
tree.insert(1, 0, Bounds(np.zeros(3), np.ones(3)))
tree.insert(2, 0, Bounds(np.full(3, 2.0), np.full(3, 3.0)))
root = tree.nodes[tree.root_id]
print(root.bounds.area())  # 54.0
```

## What it does not do

There is no scene or world that steps a simulation, no integration of
velocities, no gravity and no character controller. Contacts are generated
only for sphere–sphere and sphere–box pairs; `box_box_axis` finds the contact
axis of two boxes but no contact points, and capsules, convex meshes and
triangle meshes have bounds but no contact tests.

## Running the tests

```
pip install -e .[test]
pytest
```