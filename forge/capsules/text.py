"""Text capsule: a run of styled copy."""

import textwrap

from forge.emitters import UnitTemplate, build_emitters
from forge.registry import CapsuleDefinition
from forge.schema import CapsuleCategory, PropertyKind, PropertySchema, TargetFamily
from forge.theme import ResolvedStyle

SCHEMA = (
    PropertySchema("content", PropertyKind.STRING, required=True, description="Text to display"),
    PropertySchema(
        "variant",
        PropertyKind.ENUM,
        default="body",
        options=("title", "heading", "body", "caption"),
        description="Typographic role",
    ),
    PropertySchema("color", PropertyKind.COLOR, default="foreground"),
    PropertySchema(
        "align",
        PropertyKind.ENUM,
        default="leading",
        options=("leading", "center", "trailing"),
    ),
    PropertySchema(
        "lineLimit",
        PropertyKind.NUMBER,
        default=0,
        minimum=0,
        maximum=1000,
        description="Maximum number of lines; 0 means unlimited",
    ),
)


def _react_members(t: ResolvedStyle) -> str:
    return textwrap.dedent(
        f"""
        const fontSizes: Record<TextVariant, string> = {{
          title: {t.font_size("title")},
          heading: {t.font_size("heading")},
          body: {t.font_size("body")},
          caption: {t.font_size("caption")},
        }};

        const alignments: Record<TextAlign, CSSProperties["textAlign"]> = {{
          leading: "left",
          center: "center",
          trailing: "right",
        }};
        """
    )


_REACT = textwrap.dedent(
    """
    const Tag = variant === "title" ? "h1" : variant === "heading" ? "h2" : "p";
    const prominent = variant === "title" || variant === "heading";
    const clamp: CSSProperties =
      lineLimit > 0
        ? { display: "-webkit-box", WebkitLineClamp: lineLimit, WebkitBoxOrient: "vertical", overflow: "hidden" }
        : {};
    const style: CSSProperties = {
      margin: 0,
      color,
      fontSize: fontSizes[variant],
      fontWeight: prominent ? 700 : 400,
      fontFamily: prominent ? "var(--font-family-heading)" : "var(--font-family)",
      textAlign: alignments[align],
      ...clamp,
    };

    return <Tag style={style}>{content}</Tag>;
    """
)


_SWIFTUI = textwrap.dedent(
    """
    Text(content)
        .font(.system(size: fontSize, weight: weight))
        .foregroundColor(color)
        .multilineTextAlignment(alignment)
        .lineLimit(lineLimit > 0 ? Int(lineLimit) : nil)
        .frame(maxWidth: .infinity, alignment: frameAlignment)
    """
)


def _swift_sizes(t: ResolvedStyle) -> str:
    return textwrap.dedent(
        f"""
        private var fontSize: CGFloat {{
            switch variant {{
            case .title: return {t.font_size("title")}
            case .heading: return {t.font_size("heading")}
            case .body: return {t.font_size("body")}
            case .caption: return {t.font_size("caption")}
            }}
        }}
        """
    )


def _swiftui_members(t: ResolvedStyle) -> str:
    return _swift_sizes(t) + textwrap.dedent(
        """
        private var weight: Font.Weight {
            switch variant {
            case .title: return .bold
            case .heading: return .semibold
            default: return .regular
            }
        }

        private var alignment: TextAlignment {
            switch align {
            case .leading: return .leading
            case .center: return .center
            case .trailing: return .trailing
            }
        }

        private var frameAlignment: Alignment {
            switch align {
            case .leading: return .leading
            case .center: return .center
            case .trailing: return .trailing
            }
        }
        """
    )


_UIKIT = textwrap.dedent(
    """
    text = content
    textColor = color
    font = .systemFont(ofSize: fontSize, weight: weight)
    numberOfLines = Int(lineLimit)
    lineBreakMode = lineLimit > 0 ? .byTruncatingTail : .byWordWrapping
    switch align {
    case .leading: textAlignment = .natural
    case .center: textAlignment = .center
    case .trailing: textAlignment = .right
    }
    """
)


def _uikit_members(t: ResolvedStyle) -> str:
    return _swift_sizes(t) + textwrap.dedent(
        """
        private var weight: UIFont.Weight {
            switch variant {
            case .title: return .bold
            case .heading: return .semibold
            default: return .regular
            }
        }
        """
    )


def _compose(t: ResolvedStyle) -> str:
    return textwrap.dedent(
        f"""
        Text(
            text = content,
            color = color,
            fontSize = when (variant) {{
                ForgeTextVariant.Title -> {t.font_size("title")}
                ForgeTextVariant.Heading -> {t.font_size("heading")}
                ForgeTextVariant.Body -> {t.font_size("body")}
                ForgeTextVariant.Caption -> {t.font_size("caption")}
            }},
            fontWeight = when (variant) {{
                ForgeTextVariant.Title -> FontWeight.Bold
                ForgeTextVariant.Heading -> FontWeight.SemiBold
                else -> FontWeight.Normal
            }},
            textAlign = when (align) {{
                ForgeTextAlign.Leading -> TextAlign.Start
                ForgeTextAlign.Center -> TextAlign.Center
                ForgeTextAlign.Trailing -> TextAlign.End
            }},
            maxLines = if (lineLimit > 0f) lineLimit.toInt() else Int.MAX_VALUE,
            overflow = TextOverflow.Ellipsis,
            modifier = modifier.fillMaxWidth(),
        )
        """
    )


def _android(t: ResolvedStyle) -> str:
    return textwrap.dedent(
        f"""
        text = content
        setTextColor(color)
        setTextSize(
            TypedValue.COMPLEX_UNIT_PX,
            when (variant) {{
                "title" -> {t.font_size("title")}
                "heading" -> {t.font_size("heading")}
                "caption" -> {t.font_size("caption")}
                else -> {t.font_size("body")}
            }},
        )
        val prominent = variant == "title" || variant == "heading"
        setTypeface(typeface, if (prominent) Typeface.BOLD else Typeface.NORMAL)
        gravity = when (align) {{
            "center" -> Gravity.CENTER_HORIZONTAL
            "trailing" -> Gravity.END
            else -> Gravity.START
        }}
        if (lineLimit > 0f) {{
            maxLines = lineLimit.toInt()
            ellipsize = TextUtils.TruncateAt.END
        }}
        """
    )


TEMPLATES = {
    TargetFamily.REACT: UnitTemplate(_REACT, members=_react_members),
    TargetFamily.SWIFTUI: UnitTemplate(_SWIFTUI, members=_swiftui_members),
    TargetFamily.UIKIT: UnitTemplate(_UIKIT, members=_uikit_members, base="UILabel"),
    TargetFamily.COMPOSE: UnitTemplate(
        _compose,
        imports=(
            "androidx.compose.foundation.layout.fillMaxWidth",
            "androidx.compose.material3.Text",
            "androidx.compose.ui.text.font.FontWeight",
            "androidx.compose.ui.text.style.TextAlign",
            "androidx.compose.ui.text.style.TextOverflow",
        ),
    ),
    TargetFamily.ANDROID_VIEW: UnitTemplate(
        _android,
        imports=(
            "android.graphics.Typeface",
            "android.text.TextUtils",
            "android.util.TypedValue",
            "android.view.Gravity",
            "androidx.appcompat.widget.AppCompatTextView",
        ),
        base="AppCompatTextView",
    ),
}

TEXT = CapsuleDefinition(
    type_id="text",
    display_name="Text",
    category=CapsuleCategory.UI,
    schema=SCHEMA,
    emitters=build_emitters("text", TEMPLATES),
    tags=("text", "label", "typography", "heading", "paragraph"),
    description="Styled text in one of the theme's typographic roles",
)
