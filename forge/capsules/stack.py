"""Stack capsule: lays children out in a row or a column."""

import textwrap

from forge.emitters import UnitTemplate, build_emitters
from forge.registry import CapsuleDefinition
from forge.schema import CapsuleCategory, PropertyKind, PropertySchema, TargetFamily
from forge.syntax import to_pascal
from forge.theme import ResolvedStyle

GAPS = ("none", "xs", "sm", "md", "lg", "xl")

SCHEMA = (
    PropertySchema(
        "direction",
        PropertyKind.ENUM,
        default="vertical",
        options=("vertical", "horizontal"),
    ),
    PropertySchema("gap", PropertyKind.ENUM, default="md", options=GAPS, description="Space between children"),
    PropertySchema(
        "align",
        PropertyKind.ENUM,
        default="stretch",
        options=("start", "center", "end", "stretch"),
        description="Cross-axis alignment",
    ),
)


def _gap(t: ResolvedStyle, name: str, zero: str) -> str:
    return zero if name == "none" else t.space(name)


def _react_members(t: ResolvedStyle) -> str:
    gaps = "\n".join(f"  {name}: {_gap(t, name, '0')}," for name in GAPS)
    return textwrap.dedent(
        """
        const alignments: Record<StackAlign, CSSProperties["alignItems"]> = {
          start: "flex-start",
          center: "center",
          end: "flex-end",
          stretch: "stretch",
        };
        """
    ) + f"\nconst gaps: Record<StackGap, string | number> = {{\n{gaps}\n}};\n"


_REACT = textwrap.dedent(
    """
    const style: CSSProperties = {
      display: "flex",
      flexDirection: direction === "horizontal" ? "row" : "column",
      gap: gaps[gap],
      alignItems: alignments[align],
    };

    return <div style={style}>{children}</div>;
    """
)


def _swift_gap(t: ResolvedStyle) -> str:
    cases = "\n".join(f"    case .{name}: return {_gap(t, name, '0')}" for name in GAPS)
    return f"private var gapSize: CGFloat {{\n    switch gap {{\n{cases}\n    }}\n}}\n"


_SWIFTUI = textwrap.dedent(
    """
    if direction == .horizontal {
        HStack(alignment: verticalAlignment, spacing: gapSize) {
            content
        }
        .frame(maxWidth: .infinity, alignment: .leading)
    } else {
        VStack(alignment: horizontalAlignment, spacing: gapSize) {
            content
        }
        .frame(maxWidth: .infinity, alignment: frameAlignment)
    }
    """
)


def _swiftui_members(t: ResolvedStyle) -> str:
    return _swift_gap(t) + textwrap.dedent(
        """
        private var horizontalAlignment: HorizontalAlignment {
            switch align {
            case .center: return .center
            case .end: return .trailing
            default: return .leading
            }
        }

        private var verticalAlignment: VerticalAlignment {
            switch align {
            case .start: return .top
            case .end: return .bottom
            default: return .center
            }
        }

        private var frameAlignment: Alignment {
            switch align {
            case .center: return .center
            case .end: return .trailing
            default: return .leading
            }
        }
        """
    )


_UIKIT = textwrap.dedent(
    """
    axis = direction == .horizontal ? .horizontal : .vertical
    spacing = gapSize
    switch align {
    case .start: alignment = .leading
    case .center: alignment = .center
    case .end: alignment = .trailing
    case .stretch: alignment = .fill
    }
    arrangedSubviews.forEach(addArrangedSubview)
    """
)


def _compose(t: ResolvedStyle) -> str:
    cases = "\n".join(
        f"            ForgeStackGap.{to_pascal(name)} -> {_gap(t, name, '0.dp')}" for name in GAPS
    )
    return textwrap.dedent(
        f"""
        val gapSize = when (gap) {{
{cases}
        }}
        if (direction == ForgeStackDirection.Horizontal) {{
            Row(
                modifier = modifier.fillMaxWidth(),
                horizontalArrangement = Arrangement.spacedBy(gapSize),
                verticalAlignment = when (align) {{
                    ForgeStackAlign.Start -> Alignment.Top
                    ForgeStackAlign.End -> Alignment.Bottom
                    else -> Alignment.CenterVertically
                }},
            ) {{
                content()
            }}
        }} else {{
            Column(
                modifier = modifier.fillMaxWidth(),
                verticalArrangement = Arrangement.spacedBy(gapSize),
                horizontalAlignment = when (align) {{
                    ForgeStackAlign.Center -> Alignment.CenterHorizontally
                    ForgeStackAlign.End -> Alignment.End
                    else -> Alignment.Start
                }},
            ) {{
                content()
            }}
        }}
        """
    )


def _android(t: ResolvedStyle) -> str:
    cases = "\n".join(f'            "{name}" -> {_gap(t, name, "0f")}' for name in GAPS if name != "md")
    return textwrap.dedent(
        f"""
        orientation = if (direction == "horizontal") HORIZONTAL else VERTICAL
        gravity = when (align) {{
            "center" -> Gravity.CENTER
            "end" -> Gravity.END or Gravity.BOTTOM
            else -> Gravity.START or Gravity.TOP
        }}
        val gapSize = when (gap) {{
{cases}
            else -> {t.space("md")}
        }}.toInt()
        if (gapSize > 0) {{
            showDividers = SHOW_DIVIDER_MIDDLE
            dividerDrawable = GradientDrawable().apply {{ setSize(gapSize, gapSize) }}
        }}
        """
    )


TEMPLATES = {
    TargetFamily.REACT: UnitTemplate(_REACT, members=_react_members),
    TargetFamily.SWIFTUI: UnitTemplate(_SWIFTUI, members=_swiftui_members),
    TargetFamily.UIKIT: UnitTemplate(_UIKIT, members=_swift_gap, base="UIStackView"),
    TargetFamily.COMPOSE: UnitTemplate(
        _compose,
        imports=(
            "androidx.compose.foundation.layout.Arrangement",
            "androidx.compose.foundation.layout.Column",
            "androidx.compose.foundation.layout.Row",
            "androidx.compose.foundation.layout.fillMaxWidth",
            "androidx.compose.ui.Alignment",
            "androidx.compose.ui.unit.dp",
        ),
    ),
    TargetFamily.ANDROID_VIEW: UnitTemplate(
        _android,
        imports=(
            "android.graphics.drawable.GradientDrawable",
            "android.view.Gravity",
            "android.widget.LinearLayout",
        ),
        base="LinearLayout",
    ),
}

STACK = CapsuleDefinition(
    type_id="stack",
    display_name="Stack",
    category=CapsuleCategory.LAYOUT,
    schema=SCHEMA,
    emitters=build_emitters("stack", TEMPLATES),
    tags=("stack", "layout", "row", "column", "flex"),
    description="Arranges child capsules in a row or a column",
    accepts_children=True,
)
