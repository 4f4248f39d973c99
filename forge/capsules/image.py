"""Image capsule: a remote image with a fixed aspect ratio."""

import textwrap

from forge.emitters import UnitTemplate, build_emitters
from forge.registry import CapsuleDefinition
from forge.schema import CapsuleCategory, PropertyKind, PropertySchema, TargetFamily
from forge.theme import ResolvedStyle

RADII = ("none", "sm", "md", "lg", "full")

SCHEMA = (
    PropertySchema("src", PropertyKind.STRING, required=True, description="Image URL"),
    PropertySchema("alt", PropertyKind.STRING, default="", description="Accessibility description"),
    PropertySchema(
        "aspectRatio",
        PropertyKind.NUMBER,
        default=1.0,
        minimum=0.1,
        maximum=10,
        description="Width divided by height",
    ),
    PropertySchema("cornerRadius", PropertyKind.ENUM, default="md", options=RADII),
    PropertySchema("fit", PropertyKind.ENUM, default="cover", options=("cover", "contain")),
)


def _react_members(t: ResolvedStyle) -> str:
    radii = "\n".join(f"  {name}: {t.corner(name)}," for name in RADII)
    return f"const radii: Record<ImageCornerRadius, string> = {{\n{radii}\n}};\n"


def _react(t: ResolvedStyle) -> str:
    return textwrap.dedent(
        f"""
        const style: CSSProperties = {{
          display: "block",
          width: "100%",
          aspectRatio,
          objectFit: fit,
          borderRadius: radii[cornerRadius],
          background: {t.color("surface")},
        }};

        return <img src={{src}} alt={{alt}} loading="lazy" style={{style}} />;
        """
    )


def _swift_radius(t: ResolvedStyle) -> str:
    cases = "\n".join(f"    case .{name}: return {t.corner(name)}" for name in RADII)
    return f"private var radius: CGFloat {{\n    switch cornerRadius {{\n{cases}\n    }}\n}}\n"


def _swiftui(t: ResolvedStyle) -> str:
    return textwrap.dedent(
        f"""
        AsyncImage(url: URL(string: src)) {{ phase in
            switch phase {{
            case .success(let image):
                image
                    .resizable()
                    .aspectRatio(contentMode: fit == .cover ? .fill : .fit)
            default:
                Rectangle().fill({t.color("surface")})
            }}
        }}
        .aspectRatio(CGFloat(aspectRatio), contentMode: .fit)
        .clipShape(RoundedRectangle(cornerRadius: radius))
        .accessibilityLabel(alt)
        """
    )


def _uikit(t: ResolvedStyle) -> str:
    return textwrap.dedent(
        f"""
        contentMode = fit == .cover ? .scaleAspectFill : .scaleAspectFit
        clipsToBounds = true
        layer.cornerRadius = radius
        backgroundColor = {t.color("surface")}
        isAccessibilityElement = true
        accessibilityLabel = alt
        translatesAutoresizingMaskIntoConstraints = false
        heightAnchor.constraint(equalTo: widthAnchor, multiplier: 1 / CGFloat(aspectRatio)).isActive = true
        if let url = URL(string: src) {{
            URLSession.shared.dataTask(with: url) {{ [weak self] data, _, _ in
                guard let data, let image = UIImage(data: data) else {{ return }}
                DispatchQueue.main.async {{ self?.image = image }}
            }}.resume()
        }}
        """
    )


def _compose(t: ResolvedStyle) -> str:
    cases = "\n".join(
        f"            ForgeImageCornerRadius.{name.capitalize()} -> {t.corner(name)}" for name in RADII
    )
    return textwrap.dedent(
        f"""
        val radius = when (cornerRadius) {{
{cases}
        }}
        AsyncImage(
            model = src,
            contentDescription = alt,
            contentScale = if (fit == ForgeImageFit.Cover) ContentScale.Crop else ContentScale.Fit,
            modifier = modifier
                .fillMaxWidth()
                .aspectRatio(aspectRatio)
                .clip(RoundedCornerShape(radius))
                .background({t.color("surface")}),
        )
        """
    )


def _android(t: ResolvedStyle) -> str:
    cases = "\n".join(f'                "{name}" -> {t.corner(name)}' for name in RADII if name != "md")
    return textwrap.dedent(
        f"""
        contentDescription = alt
        scaleType = if (fit == "cover") ScaleType.CENTER_CROP else ScaleType.FIT_CENTER
        background = GradientDrawable().apply {{
            setColor({t.color("surface")})
            cornerRadius = when (this@ForgeImage.cornerRadius) {{
{cases}
                else -> {t.corner("md")}
            }}
        }}
        clipToOutline = true
        load(src)
        """
    )


_ANDROID_MEMBERS = textwrap.dedent(
    """
    override fun onMeasure(widthMeasureSpec: Int, heightMeasureSpec: Int) {
        val width = MeasureSpec.getSize(widthMeasureSpec)
        setMeasuredDimension(width, (width / aspectRatio).toInt())
    }
    """
)


TEMPLATES = {
    TargetFamily.REACT: UnitTemplate(_react, members=_react_members),
    TargetFamily.SWIFTUI: UnitTemplate(_swiftui, members=_swift_radius),
    TargetFamily.UIKIT: UnitTemplate(_uikit, members=_swift_radius, base="UIImageView"),
    TargetFamily.COMPOSE: UnitTemplate(
        _compose,
        imports=(
            "androidx.compose.foundation.background",
            "androidx.compose.foundation.layout.aspectRatio",
            "androidx.compose.foundation.layout.fillMaxWidth",
            "androidx.compose.foundation.shape.RoundedCornerShape",
            "androidx.compose.ui.draw.clip",
            "androidx.compose.ui.layout.ContentScale",
            "coil.compose.AsyncImage",
        ),
        dependencies=("io.coil-kt:coil-compose:2.6.0",),
    ),
    TargetFamily.ANDROID_VIEW: UnitTemplate(
        _android,
        members=_ANDROID_MEMBERS,
        imports=(
            "android.graphics.drawable.GradientDrawable",
            "androidx.appcompat.widget.AppCompatImageView",
            "coil.load",
        ),
        dependencies=("io.coil-kt:coil:2.6.0",),
        base="AppCompatImageView",
    ),
}

IMAGE = CapsuleDefinition(
    type_id="image",
    display_name="Image",
    category=CapsuleCategory.MEDIA,
    schema=SCHEMA,
    emitters=build_emitters("image", TEMPLATES),
    tags=("image", "picture", "photo", "media"),
    description="Remote image with a fixed aspect ratio and rounded corners",
)
