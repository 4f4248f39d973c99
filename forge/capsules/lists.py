"""List capsule: bulleted or numbered lines of text."""

import textwrap

from forge.emitters import UnitTemplate, build_emitters
from forge.registry import CapsuleDefinition
from forge.schema import CapsuleCategory, PropertyKind, PropertySchema, TargetFamily
from forge.theme import ResolvedStyle

SCHEMA = (
    PropertySchema("items", PropertyKind.ARRAY, required=True, description="Entries, rendered as text"),
    PropertySchema("ordered", PropertyKind.BOOLEAN, default=False, description="Number the entries"),
)


def _react(t: ResolvedStyle) -> str:
    return textwrap.dedent(
        f"""
        const Tag = ordered ? "ol" : "ul";
        const style: CSSProperties = {{
          margin: 0,
          paddingInlineStart: {t.space("lg")},
          display: "flex",
          flexDirection: "column",
          gap: {t.space("xs")},
          fontSize: {t.font_size("body")},
          color: {t.color("foreground")},
        }};

        return (
          <Tag style={{style}}>
            {{items.map((item, index) => (
              <li key={{index}}>{{item}}</li>
            ))}}
          </Tag>
        );
        """
    )


def _swiftui(t: ResolvedStyle) -> str:
    return textwrap.dedent(
        f"""
        VStack(alignment: .leading, spacing: {t.space("xs")}) {{
            ForEach(Array(items.enumerated()), id: \\.offset) {{ index, item in
                HStack(alignment: .firstTextBaseline, spacing: {t.space("sm")}) {{
                    Text(ordered ? "\\(index + 1)." : "\\u{{2022}}")
                        .foregroundColor({t.color("muted")})
                    Text(item)
                        .foregroundColor({t.color("foreground")})
                }}
                .font(.system(size: {t.font_size("body")}))
            }}
        }}
        .frame(maxWidth: .infinity, alignment: .leading)
        """
    )


def _uikit(t: ResolvedStyle) -> str:
    return textwrap.dedent(
        f"""
        axis = .vertical
        spacing = {t.space("xs")}
        for (index, item) in items.enumerated() {{
            let row = UILabel()
            row.numberOfLines = 0
            row.text = ordered ? "\\(index + 1). \\(item)" : "\\u{{2022}} \\(item)"
            row.font = .systemFont(ofSize: {t.font_size("body")})
            row.textColor = {t.color("foreground")}
            addArrangedSubview(row)
        }}
        """
    )


def _compose(t: ResolvedStyle) -> str:
    return textwrap.dedent(
        f"""
        Column(
            modifier = modifier.fillMaxWidth(),
            verticalArrangement = Arrangement.spacedBy({t.space("xs")}),
        ) {{
            items.forEachIndexed {{ index, item ->
                Row(horizontalArrangement = Arrangement.spacedBy({t.space("sm")})) {{
                    Text(
                        text = if (ordered) "${{index + 1}}." else "\\u2022",
                        color = {t.color("muted")},
                        fontSize = {t.font_size("body")},
                    )
                    Text(text = item, color = {t.color("foreground")}, fontSize = {t.font_size("body")})
                }}
            }}
        }}
        """
    )


def _android(t: ResolvedStyle) -> str:
    return textwrap.dedent(
        f"""
        orientation = VERTICAL
        items.forEachIndexed {{ index, item ->
            addView(TextView(context).apply {{
                text = if (ordered) "${{index + 1}}. $item" else "\\u2022 $item"
                setTextColor({t.color("foreground")})
                setTextSize(TypedValue.COMPLEX_UNIT_PX, {t.font_size("body")})
            }})
        }}
        """
    )


TEMPLATES = {
    TargetFamily.REACT: UnitTemplate(_react),
    TargetFamily.SWIFTUI: UnitTemplate(_swiftui),
    TargetFamily.UIKIT: UnitTemplate(_uikit, base="UIStackView"),
    TargetFamily.COMPOSE: UnitTemplate(
        _compose,
        imports=(
            "androidx.compose.foundation.layout.Arrangement",
            "androidx.compose.foundation.layout.Column",
            "androidx.compose.foundation.layout.Row",
            "androidx.compose.foundation.layout.fillMaxWidth",
            "androidx.compose.material3.Text",
        ),
    ),
    TargetFamily.ANDROID_VIEW: UnitTemplate(
        _android,
        imports=(
            "android.util.TypedValue",
            "android.widget.LinearLayout",
            "android.widget.TextView",
        ),
        base="LinearLayout",
    ),
}

LIST = CapsuleDefinition(
    type_id="list",
    display_name="List",
    category=CapsuleCategory.DATA,
    schema=SCHEMA,
    emitters=build_emitters("list", TEMPLATES),
    tags=("list", "bullets", "items", "ordered"),
    description="Bulleted or numbered list of text entries",
)
