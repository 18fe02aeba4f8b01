"""Per-draw shader parameters and their packed uniform representation."""

from __future__ import annotations

from dataclasses import dataclass, field, fields

from .renderer import ShaderType

UNIFORM_VEC4_COUNT = 14
UNIFORM_FLOAT_COUNT = UNIFORM_VEC4_COUNT * 4

_SEQUENCE_LENGTHS = {
    "scissor_mat": 12,
    "paint_mat": 12,
    "inner_col": 4,
    "outer_col": 4,
    "scissor_ext": 2,
    "scissor_scale": 2,
    "extent": 2,
    "image_blur_filter_direction": 2,
    "image_blur_filter_coeff": 3,
}


def _zeros(count: int):
    return field(default_factory=lambda: (0.0,) * count)


@dataclass
class Params:
    """Everything the fragment shader needs to draw one command."""

    scissor_mat: tuple[float, ...] = _zeros(12)
    paint_mat: tuple[float, ...] = _zeros(12)
    inner_col: tuple[float, ...] = _zeros(4)
    outer_col: tuple[float, ...] = _zeros(4)
    scissor_ext: tuple[float, ...] = _zeros(2)
    scissor_scale: tuple[float, ...] = _zeros(2)
    extent: tuple[float, ...] = _zeros(2)
    radius: float = 0.0
    feather: float = 0.0
    stroke_mult: float = 0.0
    stroke_thr: float = 0.0
    tex_type: float = 0.0
    shader_type: ShaderType = ShaderType.FILL_GRADIENT
    # 0: no glyph rendering, 1: alpha mask, 2: colour texture
    glyph_texture_type: int = 0
    image_blur_filter_direction: tuple[float, ...] = _zeros(2)
    image_blur_filter_sigma: float = 0.0
    image_blur_filter_coeff: tuple[float, ...] = _zeros(3)

    def __post_init__(self) -> None:
        for name, expected in _SEQUENCE_LENGTHS.items():
            values = tuple(float(v) for v in getattr(self, name))
            if len(values) != expected:
                raise ValueError(f"{name} needs {expected} values, got {len(values)}")
            setattr(self, name, values)
        if self.glyph_texture_type not in (0, 1, 2):
            raise ValueError(f"invalid glyph texture type: {self.glyph_texture_type}")

    def uses_glyph_texture(self) -> bool:
        """Whether the command samples a glyph atlas texture."""
        return self.glyph_texture_type != 0


@dataclass(frozen=True)
class UniformArray:
    """The flat block of floats uploaded as the shader's ``frag`` uniform."""

    values: tuple[float, ...] = (0.0,) * UNIFORM_FLOAT_COUNT

    def __post_init__(self) -> None:
        values = tuple(float(v) for v in self.values)
        if len(values) != UNIFORM_FLOAT_COUNT:
            raise ValueError(f"uniform array needs {UNIFORM_FLOAT_COUNT} values, got {len(values)}")
        object.__setattr__(self, "values", values)

    @classmethod
    def from_params(cls, params: Params) -> UniformArray:
        """Pack shader parameters into the uniform layout."""
        packed = [
            *params.scissor_mat,  # 0..12
            *params.paint_mat,  # 12..24
            *params.inner_col,  # 24..28
            *params.outer_col,  # 28..32
            *params.scissor_ext,  # 32..34
            *params.scissor_scale,  # 34..36
            *params.extent,  # 36..38
            params.radius,  # 38
            params.feather,  # 39
            params.stroke_mult,  # 40
            params.stroke_thr,  # 41
            params.tex_type,  # 42
            params.shader_type.to_f32(),  # 43
            float(params.glyph_texture_type),  # 44
            *params.image_blur_filter_direction,  # 45..47
            params.image_blur_filter_sigma,  # 47
            *params.image_blur_filter_coeff,  # 48..51
        ]
        packed.extend([0.0] * (UNIFORM_FLOAT_COUNT - len(packed)))
        return cls(tuple(packed))

    def as_list(self) -> list[float]:
        """The packed floats as a new list."""
        return list(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self):
        return iter(self.values)


__all__ = [
    "Params",
    "UniformArray",
    "UNIFORM_FLOAT_COUNT",
    "UNIFORM_VEC4_COUNT",
]

# Keep the dataclass field order aligned with the packing layout above.
assert [f.name for f in fields(Params)][:7] == [
    "scissor_mat",
    "paint_mat",
    "inner_col",
    "outer_col",
    "scissor_ext",
    "scissor_scale",
    "extent",
]