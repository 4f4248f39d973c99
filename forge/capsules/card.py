"""Card capsule: a surface grouping a header and child content."""

import textwrap

from forge.emitters import UnitTemplate, build_emitters
from forge.ir import FileKind, TargetFile
from forge.registry import CapsuleDefinition
from forge.schema import CapsuleCategory, PropertyKind, PropertySchema, TargetFamily
from forge.theme import ResolvedStyle

SCHEMA = (
    PropertySchema("title", PropertyKind.STRING, description="Header text"),
    PropertySchema("subtitle", PropertyKind.STRING, description="Secondary header text"),
    PropertySchema("elevated", PropertyKind.BOOLEAN, default=True, description="Draw a shadow instead of a border"),
    PropertySchema("padding", PropertyKind.ENUM, default="md", options=("sm", "md", "lg")),
)


def _react_members(t: ResolvedStyle) -> str:
    return textwrap.dedent(
        f"""
        const insets: Record<CardPadding, string> = {{
          sm: {t.space("sm")},
          md: {t.space("md")},
          lg: {t.space("lg")},
        }};
        """
    )


def _react(t: ResolvedStyle) -> str:
    shadow = '"0 1px 3px rgba(15, 23, 42, 0.12)"' if t.shadows else '"none"'
    return textwrap.dedent(
        f"""
        const style: CSSProperties = {{
          display: "flex",
          flexDirection: "column",
          gap: {t.space("sm")},
          padding: insets[padding],
          background: {t.color("surface")},
          borderRadius: {t.corner()},
          borderWidth: elevated ? 0 : 1,
          borderStyle: "solid",
          borderColor: {t.color("disabled")},
          boxShadow: elevated ? {shadow} : "none",
        }};
        const titleStyle: CSSProperties = {{
          margin: 0,
          fontSize: {t.font_size("heading")},
          fontWeight: 600,
          color: {t.color("foreground")},
        }};
        const subtitleStyle: CSSProperties = {{
          margin: 0,
          fontSize: {t.font_size("caption")},
          color: {t.color("muted")},
        }};

        return (
          <section style={{style}}>
            {{title ? <h3 style={{titleStyle}}>{{title}}</h3> : null}}
            {{subtitle ? <p style={{subtitleStyle}}>{{subtitle}}</p> : null}}
            {{children}}
          </section>
        );
        """
    )


def _swift_inset(t: ResolvedStyle) -> str:
    return textwrap.dedent(
        f"""
        private var inset: CGFloat {{
            switch padding {{
            case .sm: return {t.space("sm")}
            case .md: return {t.space("md")}
            case .lg: return {t.space("lg")}
            }}
        }}
        """
    )


def _swiftui(t: ResolvedStyle) -> str:
    opacity = "elevated ? 0.12 : 0" if t.shadows else "0"
    return textwrap.dedent(
        f"""
        VStack(alignment: .leading, spacing: {t.space("sm")}) {{
            if let title {{
                Text(title)
                    .font(.system(size: {t.font_size("heading")}, weight: .semibold))
                    .foregroundColor({t.color("foreground")})
            }}
            if let subtitle {{
                Text(subtitle)
                    .font(.system(size: {t.font_size("caption")}))
                    .foregroundColor({t.color("muted")})
            }}
            content
        }}
        .padding(inset)
        .frame(maxWidth: .infinity, alignment: .leading)
        .background(
            RoundedRectangle(cornerRadius: {t.corner()})
                .fill({t.color("surface")})
                .shadow(color: .black.opacity({opacity}), radius: 4, x: 0, y: 1)
        )
        .overlay(
            RoundedRectangle(cornerRadius: {t.corner()})
                .stroke({t.color("disabled")}, lineWidth: elevated ? 0 : 1)
        )
        """
    )


def _uikit(t: ResolvedStyle) -> str:
    opacity = "0.12" if t.shadows else "0"
    return textwrap.dedent(
        f"""
        axis = .vertical
        alignment = .fill
        spacing = {t.space("sm")}
        isLayoutMarginsRelativeArrangement = true
        directionalLayoutMargins = NSDirectionalEdgeInsets(top: inset, leading: inset, bottom: inset, trailing: inset)
        backgroundColor = {t.color("surface")}
        layer.cornerRadius = {t.corner()}
        if elevated {{
            layer.shadowColor = UIColor.black.cgColor
            layer.shadowOpacity = {opacity}
            layer.shadowRadius = 4
            layer.shadowOffset = CGSize(width: 0, height: 1)
        }} else {{
            layer.borderWidth = 1
            layer.borderColor = {t.color("disabled")}.cgColor
        }}
        if let title {{
            let titleLabel = UILabel()
            titleLabel.text = title
            titleLabel.font = .systemFont(ofSize: {t.font_size("heading")}, weight: .semibold)
            titleLabel.textColor = {t.color("foreground")}
            addArrangedSubview(titleLabel)
        }}
        if let subtitle {{
            let subtitleLabel = UILabel()
            subtitleLabel.text = subtitle
            subtitleLabel.font = .systemFont(ofSize: {t.font_size("caption")})
            subtitleLabel.textColor = {t.color("muted")}
            subtitleLabel.numberOfLines = 0
            addArrangedSubview(subtitleLabel)
        }}
        arrangedSubviews.forEach(addArrangedSubview)
        """
    )


def _compose(t: ResolvedStyle) -> str:
    elevation = "if (elevated) 2.dp else 0.dp" if t.shadows else "0.dp"
    return textwrap.dedent(
        f"""
        val inset = when (padding) {{
            ForgeCardPadding.Sm -> {t.space("sm")}
            ForgeCardPadding.Md -> {t.space("md")}
            ForgeCardPadding.Lg -> {t.space("lg")}
        }}
        Card(
            modifier = modifier.fillMaxWidth(),
            shape = RoundedCornerShape({t.corner()}),
            colors = CardDefaults.cardColors(containerColor = {t.color("surface")}),
            elevation = CardDefaults.cardElevation(defaultElevation = {elevation}),
            border = if (elevated) null else BorderStroke(1.dp, {t.color("disabled")}),
        ) {{
            Column(
                modifier = Modifier.padding(inset),
                verticalArrangement = Arrangement.spacedBy({t.space("sm")}),
            ) {{
                if (title != null) {{
                    Text(
                        text = title,
                        color = {t.color("foreground")},
                        fontSize = {t.font_size("heading")},
                        fontWeight = FontWeight.SemiBold,
                    )
                }}
                if (subtitle != null) {{
                    Text(text = subtitle, color = {t.color("muted")}, fontSize = {t.font_size("caption")})
                }}
                content()
            }}
        }}
        """
    )


def _android(t: ResolvedStyle) -> str:
    elevation = "\nif (elevated) elevation = 2f * resources.displayMetrics.density" if t.shadows else ""
    return textwrap.dedent(
        f"""
        orientation = VERTICAL
        val inset = when (padding) {{
            "sm" -> {t.space("sm")}
            "lg" -> {t.space("lg")}
            else -> {t.space("md")}
        }}.toInt()
        setPadding(inset, inset, inset, inset)
        background = ContextCompat.getDrawable(
            context,
            if (elevated) R.drawable.forge_card_elevated else R.drawable.forge_card_outlined,
        )
        if (title != null) {{
            addView(TextView(context).apply {{
                text = title
                setTextColor({t.color("foreground")})
                setTextSize(TypedValue.COMPLEX_UNIT_PX, {t.font_size("heading")})
                setTypeface(typeface, Typeface.BOLD)
            }})
        }}
        if (subtitle != null) {{
            addView(TextView(context).apply {{
                text = subtitle
                setTextColor({t.color("muted")})
                setTextSize(TypedValue.COMPLEX_UNIT_PX, {t.font_size("caption")})
            }})
        }}
        """
    ).rstrip("\n") + elevation


def _drawable(stroke: bool) -> str:
    lines = [
        '<?xml version="1.0" encoding="utf-8"?>',
        '<shape xmlns:android="http://schemas.android.com/apk/res/android" android:shape="rectangle">',
        '    <solid android:color="@color/forge_surface" />',
        '    <corners android:radius="@dimen/forge_radius_base" />',
    ]
    if stroke:
        lines.append('    <stroke android:width="1dp" android:color="@color/forge_disabled" />')
    lines.append("</shape>")
    return "\n".join(lines) + "\n"


def _android_resources(t: ResolvedStyle) -> tuple[TargetFile, ...]:
    return (
        TargetFile(
            "app/src/main/res/drawable/forge_card_elevated.xml", _drawable(False), FileKind.SUPPORT
        ),
        TargetFile(
            "app/src/main/res/drawable/forge_card_outlined.xml", _drawable(True), FileKind.SUPPORT
        ),
    )


TEMPLATES = {
    TargetFamily.REACT: UnitTemplate(_react, members=_react_members),
    TargetFamily.SWIFTUI: UnitTemplate(_swiftui, members=_swift_inset),
    TargetFamily.UIKIT: UnitTemplate(_uikit, members=_swift_inset, base="UIStackView"),
    TargetFamily.COMPOSE: UnitTemplate(
        _compose,
        imports=(
            "androidx.compose.foundation.BorderStroke",
            "androidx.compose.foundation.layout.Arrangement",
            "androidx.compose.foundation.layout.Column",
            "androidx.compose.foundation.layout.fillMaxWidth",
            "androidx.compose.foundation.layout.padding",
            "androidx.compose.foundation.shape.RoundedCornerShape",
            "androidx.compose.material3.Card",
            "androidx.compose.material3.CardDefaults",
            "androidx.compose.material3.Text",
            "androidx.compose.ui.text.font.FontWeight",
            "androidx.compose.ui.unit.dp",
        ),
    ),
    TargetFamily.ANDROID_VIEW: UnitTemplate(
        _android,
        imports=(
            "android.graphics.Typeface",
            "android.util.TypedValue",
            "android.widget.LinearLayout",
            "android.widget.TextView",
        ),
        base="LinearLayout",
        resources=_android_resources,
    ),
}

CARD = CapsuleDefinition(
    type_id="card",
    display_name="Card",
    category=CapsuleCategory.LAYOUT,
    schema=SCHEMA,
    emitters=build_emitters("card", TEMPLATES),
    tags=("card", "container", "surface", "panel"),
    description="Surface with an optional header that groups child capsules",
    accepts_children=True,
)
