"""Button capsule: a pressable control that dispatches an action."""

import textwrap

from forge.emitters import UnitTemplate, build_emitters
from forge.registry import CapsuleDefinition
from forge.schema import CapsuleCategory, PropertyKind, PropertySchema, TargetFamily
from forge.theme import ResolvedStyle

SCHEMA = (
    PropertySchema("label", PropertyKind.STRING, required=True, description="Button text"),
    PropertySchema(
        "variant",
        PropertyKind.ENUM,
        default="primary",
        options=("primary", "secondary", "outline", "ghost", "destructive"),
        description="Visual style",
    ),
    PropertySchema(
        "size",
        PropertyKind.ENUM,
        default="md",
        options=("sm", "md", "lg"),
        description="Padding and font size",
    ),
    PropertySchema("disabled", PropertyKind.BOOLEAN, default=False),
    PropertySchema("fullWidth", PropertyKind.BOOLEAN, default=False, description="Stretch to the container width"),
    PropertySchema("icon", PropertyKind.ICON, description="Leading icon"),
    PropertySchema("onPress", PropertyKind.ACTION, description="Action dispatched on press"),
)


# =============================================================================
# React
# =============================================================================


def _react_members(t: ResolvedStyle) -> str:
    return textwrap.dedent(
        f"""
        const variants: Record<ButtonVariant, CSSProperties> = {{
          primary: {{ background: {t.color("primary")}, color: {t.color("onPrimary")} }},
          secondary: {{ background: {t.color("secondary")}, color: {t.color("onPrimary")} }},
          outline: {{ background: "transparent", color: {t.color("primary")}, borderColor: {t.color("primary")} }},
          ghost: {{ background: "transparent", color: {t.color("primary")} }},
          destructive: {{ background: {t.color("error")}, color: {t.color("onPrimary")} }},
        }};

        const sizes: Record<ButtonSize, CSSProperties> = {{
          sm: {{ paddingBlock: {t.space("xs")}, paddingInline: {t.space("sm")}, fontSize: {t.font_size("caption")} }},
          md: {{ paddingBlock: {t.space("sm")}, paddingInline: {t.space("md")}, fontSize: {t.font_size("body")} }},
          lg: {{ paddingBlock: {t.space("md")}, paddingInline: {t.space("lg")}, fontSize: {t.font_size("heading")} }},
        }};
        """
    )


def _react(t: ResolvedStyle) -> str:
    return textwrap.dedent(
        f"""
        const style: CSSProperties = {{
          ...variants[variant],
          ...sizes[size],
          display: "inline-flex",
          alignItems: "center",
          justifyContent: "center",
          gap: {t.space("xs")},
          borderWidth: variant === "outline" ? 1 : 0,
          borderStyle: "solid",
          borderRadius: {t.corner()},
          fontWeight: 600,
          width: fullWidth ? "100%" : undefined,
          opacity: disabled ? 0.5 : 1,
          cursor: disabled ? "not-allowed" : "pointer",
        }};

        return (
          <button
            type="button"
            style={{style}}
            disabled={{disabled}}
            onClick={{onPress ? () => dispatch(onPress) : undefined}}
          >
            {{icon ? <span aria-hidden="true">{{icon}}</span> : null}}
            {{label}}
          </button>
        );
        """
    )


# =============================================================================
# SwiftUI
# =============================================================================


def _swiftui(t: ResolvedStyle) -> str:
    return textwrap.dedent(
        f"""
        Button(action: {{
            if let onPress {{
                ActionBus.shared.dispatch(onPress)
            }}
        }}) {{
            HStack(spacing: {t.space("xs")}) {{
                if let icon {{
                    Image(systemName: icon)
                }}
                Text(label)
                    .fontWeight(.semibold)
            }}
            .font(.system(size: fontSize))
            .padding(.vertical, padding)
            .padding(.horizontal, padding * 2)
            .frame(maxWidth: fullWidth ? .infinity : nil)
            .foregroundColor(foreground)
            .background(background)
            .clipShape(RoundedRectangle(cornerRadius: {t.corner()}))
            .overlay(
                RoundedRectangle(cornerRadius: {t.corner()})
                    .stroke(variant == .outline ? {t.color("primary")} : Color.clear, lineWidth: 1)
            )
        }}
        .buttonStyle(.plain)
        .disabled(disabled)
        .opacity(disabled ? 0.5 : 1)
        """
    )


def _swift_members(t: ResolvedStyle, color_type: str, clear: str) -> str:
    return textwrap.dedent(
        f"""
        private var background: {color_type} {{
            switch variant {{
            case .primary: return {t.color("primary")}
            case .secondary: return {t.color("secondary")}
            case .destructive: return {t.color("error")}
            case .outline, .ghost: return {clear}
            }}
        }}

        private var foreground: {color_type} {{
            switch variant {{
            case .outline, .ghost: return {t.color("primary")}
            default: return {t.color("onPrimary")}
            }}
        }}

        private var fontSize: CGFloat {{
            switch size {{
            case .sm: return {t.font_size("caption")}
            case .md: return {t.font_size("body")}
            case .lg: return {t.font_size("heading")}
            }}
        }}

        private var padding: CGFloat {{
            switch size {{
            case .sm: return {t.space("xs")}
            case .md: return {t.space("sm")}
            case .lg: return {t.space("md")}
            }}
        }}
        """
    )


# =============================================================================
# UIKit
# =============================================================================


def _uikit(t: ResolvedStyle) -> str:
    return textwrap.dedent(
        f"""
        var config = UIButton.Configuration.filled()
        config.title = label
        config.baseBackgroundColor = background
        config.baseForegroundColor = foreground
        config.background.cornerRadius = {t.corner()}
        if variant == .outline {{
            config.background.strokeColor = {t.color("primary")}
            config.background.strokeWidth = 1
        }}
        config.contentInsets = NSDirectionalEdgeInsets(
            top: padding, leading: padding * 2, bottom: padding, trailing: padding * 2
        )
        let font = UIFont.systemFont(ofSize: fontSize, weight: .semibold)
        config.titleTextAttributesTransformer = UIConfigurationTextAttributesTransformer {{ incoming in
            var outgoing = incoming
            outgoing.font = font
            return outgoing
        }}
        if let icon {{
            config.image = UIImage(systemName: icon)
            config.imagePadding = {t.space("xs")}
        }}
        configuration = config
        isEnabled = !disabled
        if fullWidth {{
            setContentHuggingPriority(.defaultLow, for: .horizontal)
        }}
        if let onPress {{
            addAction(UIAction {{ _ in ActionBus.shared.dispatch(onPress) }}, for: .touchUpInside)
        }}
        """
    )


# =============================================================================
# Compose
# =============================================================================


def _compose(t: ResolvedStyle) -> str:
    return textwrap.dedent(
        f"""
        val outlined = variant == ForgeButtonVariant.Outline || variant == ForgeButtonVariant.Ghost
        val container = when (variant) {{
            ForgeButtonVariant.Primary -> {t.color("primary")}
            ForgeButtonVariant.Secondary -> {t.color("secondary")}
            ForgeButtonVariant.Destructive -> {t.color("error")}
            ForgeButtonVariant.Outline, ForgeButtonVariant.Ghost -> Color.Transparent
        }}
        val padding = when (size) {{
            ForgeButtonSize.Sm -> {t.space("xs")}
            ForgeButtonSize.Md -> {t.space("sm")}
            ForgeButtonSize.Lg -> {t.space("md")}
        }}
        val fontSize = when (size) {{
            ForgeButtonSize.Sm -> {t.font_size("caption")}
            ForgeButtonSize.Md -> {t.font_size("body")}
            ForgeButtonSize.Lg -> {t.font_size("heading")}
        }}
        Button(
            onClick = {{ onPress?.let {{ ActionBus.dispatch(it) }} }},
            enabled = !disabled,
            shape = RoundedCornerShape({t.corner()}),
            colors = ButtonDefaults.buttonColors(
                containerColor = container,
                contentColor = if (outlined) {t.color("primary")} else {t.color("onPrimary")},
            ),
            border = if (variant == ForgeButtonVariant.Outline) BorderStroke(1.dp, {t.color("primary")}) else null,
            contentPadding = PaddingValues(horizontal = padding * 2, vertical = padding),
            modifier = if (fullWidth) modifier.fillMaxWidth() else modifier,
        ) {{
            if (icon != null) {{
                Text(text = icon, fontSize = fontSize)
                Spacer(Modifier.width({t.space("xs")}))
            }}
            Text(text = label, fontSize = fontSize, fontWeight = FontWeight.SemiBold)
        }}
        """
    )


# =============================================================================
# Android views
# =============================================================================


def _android(t: ResolvedStyle) -> str:
    return textwrap.dedent(
        f"""
        text = if (icon != null) "$icon  $label" else label
        isAllCaps = false
        isEnabled = !disabled
        alpha = if (disabled) 0.5f else 1f
        val primary = {t.color("primary")}
        val fill = when (variant) {{
            "secondary" -> {t.color("secondary")}
            "destructive" -> {t.color("error")}
            "outline", "ghost" -> Color.TRANSPARENT
            else -> primary
        }}
        setTextColor(if (variant == "outline" || variant == "ghost") primary else {t.color("onPrimary")})
        background = GradientDrawable().apply {{
            setColor(fill)
            cornerRadius = {t.corner()}
            if (variant == "outline") setStroke(2, primary)
        }}
        val pad = when (size) {{
            "sm" -> {t.space("xs")}
            "lg" -> {t.space("md")}
            else -> {t.space("sm")}
        }}.toInt()
        setPadding(pad * 2, pad, pad * 2, pad)
        setTextSize(
            TypedValue.COMPLEX_UNIT_PX,
            when (size) {{
                "sm" -> {t.font_size("caption")}
                "lg" -> {t.font_size("heading")}
                else -> {t.font_size("body")}
            }},
        )
        if (!fullWidth) {{
            post {{ layoutParams = layoutParams.apply {{ width = ViewGroup.LayoutParams.WRAP_CONTENT }} }}
        }}
        onPress?.let {{ action -> setOnClickListener {{ ActionBus.dispatch(action) }} }}
        """
    )


TEMPLATES = {
    TargetFamily.REACT: UnitTemplate(_react, members=_react_members),
    TargetFamily.SWIFTUI: UnitTemplate(
        _swiftui, members=lambda t: _swift_members(t, "Color", "Color.clear")
    ),
    TargetFamily.UIKIT: UnitTemplate(
        _uikit, members=lambda t: _swift_members(t, "UIColor", ".clear"), base="UIButton"
    ),
    TargetFamily.COMPOSE: UnitTemplate(
        _compose,
        imports=(
            "androidx.compose.foundation.BorderStroke",
            "androidx.compose.foundation.layout.PaddingValues",
            "androidx.compose.foundation.layout.Spacer",
            "androidx.compose.foundation.layout.fillMaxWidth",
            "androidx.compose.foundation.layout.width",
            "androidx.compose.foundation.shape.RoundedCornerShape",
            "androidx.compose.material3.Button",
            "androidx.compose.material3.ButtonDefaults",
            "androidx.compose.material3.Text",
            "androidx.compose.ui.graphics.Color",
            "androidx.compose.ui.text.font.FontWeight",
            "androidx.compose.ui.unit.dp",
        ),
    ),
    TargetFamily.ANDROID_VIEW: UnitTemplate(
        _android,
        imports=(
            "android.graphics.Color",
            "android.graphics.drawable.GradientDrawable",
            "android.util.TypedValue",
            "android.view.ViewGroup",
            "androidx.appcompat.widget.AppCompatButton",
        ),
        base="AppCompatButton",
    ),
}

BUTTON = CapsuleDefinition(
    type_id="button",
    display_name="Button",
    category=CapsuleCategory.UI,
    schema=SCHEMA,
    emitters=build_emitters("button", TEMPLATES),
    tags=("button", "action", "cta", "click"),
    description="Pressable control that dispatches an action",
)
