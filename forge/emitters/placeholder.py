"""Fallback emitters for unknown capsule types and unsupported targets.

A placeholder renders a visibly-labelled box naming the missing type and
still renders its children, so one unknown capsule never hides the rest
of the tree.
"""

import textwrap

from forge.schema import PropertyKind, PropertySchema, Target, TargetFamily
from forge.theme import ResolvedStyle

from .lib import EMITTER_CLASSES, Emitter, RenderNode, UnitTemplate

PLACEHOLDER_NAME = "placeholder"

PLACEHOLDER_SCHEMA: tuple[PropertySchema, ...] = (
    PropertySchema(
        "typeId",
        PropertyKind.STRING,
        required=True,
        description="Capsule type that could not be rendered",
    ),
)


def _react(theme: ResolvedStyle) -> str:
    return textwrap.dedent(
        f"""
        const style: CSSProperties = {{
          borderWidth: 2,
          borderStyle: "dashed",
          borderColor: {theme.color("warning")},
          borderRadius: {theme.corner()},
          padding: {theme.space("md")},
          color: {theme.color("muted")},
          fontSize: {theme.font_size("caption")},
        }};

        return (
          <div data-forge-placeholder={{typeId}} style={{style}}>
            <strong>Unsupported component: {{typeId}}</strong>
            {{children}}
          </div>
        );
        """
    )


def _swiftui(theme: ResolvedStyle) -> str:
    return textwrap.dedent(
        f"""
        VStack(alignment: .leading, spacing: {theme.space("sm")}) {{
            Text("Unsupported component: \\(typeId)")
                .font(.system(size: {theme.font_size("caption")}, weight: .semibold))
                .foregroundColor({theme.color("muted")})
            content
        }}
        .padding({theme.space("md")})
        .overlay(
            RoundedRectangle(cornerRadius: {theme.corner()})
                .stroke({theme.color("warning")}, style: StrokeStyle(lineWidth: 2, dash: [6]))
        )
        """
    )


def _uikit(theme: ResolvedStyle) -> str:
    md = theme.space("md")
    return textwrap.dedent(
        f"""
        axis = .vertical
        spacing = {theme.space("sm")}
        isLayoutMarginsRelativeArrangement = true
        layoutMargins = UIEdgeInsets(top: {md}, left: {md}, bottom: {md}, right: {md})
        layer.borderWidth = 2
        layer.borderColor = {theme.color("warning")}.cgColor
        layer.cornerRadius = {theme.corner()}

        let title = UILabel()
        title.text = "Unsupported component: \\(typeId)"
        title.font = .systemFont(ofSize: {theme.font_size("caption")}, weight: .semibold)
        title.textColor = {theme.color("muted")}
        addArrangedSubview(title)
        arrangedSubviews.forEach(addArrangedSubview)
        """
    )


def _compose(theme: ResolvedStyle) -> str:
    return textwrap.dedent(
        f"""
        Column(
            modifier = modifier
                .fillMaxWidth()
                .border(2.dp, {theme.color("warning")}, RoundedCornerShape({theme.corner()}))
                .padding({theme.space("md")}),
            verticalArrangement = Arrangement.spacedBy({theme.space("sm")}),
        ) {{
            Text(
                text = "Unsupported component: $typeId",
                color = {theme.color("muted")},
                fontSize = {theme.font_size("caption")},
                fontWeight = FontWeight.SemiBold,
            )
            content()
        }}
        """
    )


def _android(theme: ResolvedStyle) -> str:
    return textwrap.dedent(
        f"""
        orientation = VERTICAL
        val pad = {theme.space("md")}.toInt()
        setPadding(pad, pad, pad, pad)
        background = GradientDrawable().apply {{
            cornerRadius = {theme.corner()}
            setStroke(4, {theme.color("warning")})
        }}
        addView(TextView(context).apply {{
            text = "Unsupported component: $typeId"
            setTextColor({theme.color("muted")})
            setTextSize(TypedValue.COMPLEX_UNIT_PX, {theme.font_size("caption")})
        }})
        """
    )


PLACEHOLDER_TEMPLATES: dict[TargetFamily, UnitTemplate] = {
    TargetFamily.REACT: UnitTemplate(_react),
    TargetFamily.SWIFTUI: UnitTemplate(_swiftui),
    TargetFamily.UIKIT: UnitTemplate(_uikit, base="UIStackView"),
    TargetFamily.COMPOSE: UnitTemplate(
        _compose,
        imports=(
            "androidx.compose.foundation.border",
            "androidx.compose.foundation.layout.Arrangement",
            "androidx.compose.foundation.layout.Column",
            "androidx.compose.foundation.layout.fillMaxWidth",
            "androidx.compose.foundation.layout.padding",
            "androidx.compose.foundation.shape.RoundedCornerShape",
            "androidx.compose.material3.Text",
            "androidx.compose.ui.text.font.FontWeight",
            "androidx.compose.ui.unit.dp",
        ),
    ),
    TargetFamily.ANDROID_VIEW: UnitTemplate(
        _android,
        imports=(
            "android.graphics.drawable.GradientDrawable",
            "android.util.TypedValue",
            "android.widget.LinearLayout",
            "android.widget.TextView",
        ),
        base="LinearLayout",
    ),
}

PLACEHOLDER_EMITTERS: dict[TargetFamily, Emitter] = {
    family: EMITTER_CLASSES[family](PLACEHOLDER_NAME, template)
    for family, template in PLACEHOLDER_TEMPLATES.items()
}


def placeholder_emitter(target: Target) -> Emitter:
    """Get the fallback emitter for a target."""
    return PLACEHOLDER_EMITTERS[target.family]


def placeholder_node(instance_id: str, type_id: str, children: tuple[str, ...] = ()) -> RenderNode:
    """Build the render node of a placeholder for an unrenderable instance."""
    return RenderNode(
        instance_id=instance_id,
        type_id=type_id,
        values={"typeId": type_id},
        schema=PLACEHOLDER_SCHEMA,
        children=children,
        accepts_children=True,
    )


__all__ = [
    "PLACEHOLDER_NAME",
    "PLACEHOLDER_SCHEMA",
    "PLACEHOLDER_TEMPLATES",
    "PLACEHOLDER_EMITTERS",
    "placeholder_emitter",
    "placeholder_node",
]
