"""Switch capsule: a labelled on/off toggle."""

import textwrap

from forge.emitters import UnitTemplate, build_emitters
from forge.registry import CapsuleDefinition
from forge.schema import CapsuleCategory, PropertyKind, PropertySchema, TargetFamily
from forge.theme import ResolvedStyle

SCHEMA = (
    PropertySchema("label", PropertyKind.STRING, description="Label text"),
    PropertySchema("checked", PropertyKind.BOOLEAN, default=False, description="Initial state"),
    PropertySchema("disabled", PropertyKind.BOOLEAN, default=False),
    PropertySchema("color", PropertyKind.COLOR, default="primary", description="Track color when on"),
    PropertySchema("onChange", PropertyKind.ACTION, description="Action dispatched with the new state"),
)


def _react(t: ResolvedStyle) -> str:
    return textwrap.dedent(
        f"""
        const [on, setOn] = useState(checked);

        const toggle = () => {{
          if (disabled) return;
          const next = !on;
          setOn(next);
          if (onChange) dispatch(onChange, next);
        }};

        const row: CSSProperties = {{
          display: "flex",
          alignItems: "center",
          gap: {t.space("sm")},
          fontSize: {t.font_size("body")},
          color: {t.color("foreground")},
          opacity: disabled ? 0.5 : 1,
        }};
        const track: CSSProperties = {{
          position: "relative",
          width: 44,
          height: 24,
          padding: 0,
          border: "none",
          borderRadius: {t.corner("full")},
          background: on ? color : {t.color("disabled")},
          cursor: disabled ? "not-allowed" : "pointer",
          transition: "background 150ms",
        }};
        const thumb: CSSProperties = {{
          position: "absolute",
          top: 2,
          left: on ? 22 : 2,
          width: 20,
          height: 20,
          borderRadius: "50%",
          background: {t.color("onPrimary")},
          transition: "left 150ms",
        }};

        return (
          <label style={{row}}>
            <button
              type="button"
              role="switch"
              aria-checked={{on}}
              disabled={{disabled}}
              onClick={{toggle}}
              style={{track}}
            >
              <span style={{thumb}} />
            </button>
            {{label ? <span>{{label}}</span> : null}}
          </label>
        );
        """
    )


def _swiftui(t: ResolvedStyle) -> str:
    return textwrap.dedent(
        f"""
        Toggle(isOn: Binding(
            get: {{ isOn ?? checked }},
            set: {{ value in
                isOn = value
                if let onChange {{
                    ActionBus.shared.dispatch(onChange, payload: value)
                }}
            }}
        )) {{
            if let label {{
                Text(label)
            }}
        }}
        .font(.system(size: {t.font_size("body")}))
        .foregroundColor({t.color("foreground")})
        .tint(color)
        .disabled(disabled)
        """
    )


_SWIFTUI_MEMBERS = textwrap.dedent(
    """
    @State var isOn: Bool? = nil
    """
)


def _uikit(t: ResolvedStyle) -> str:
    return textwrap.dedent(
        f"""
        axis = .horizontal
        alignment = .center
        spacing = {t.space("sm")}
        if let label {{
            let caption = UILabel()
            caption.text = label
            caption.font = .systemFont(ofSize: {t.font_size("body")})
            caption.textColor = {t.color("foreground")}
            addArrangedSubview(caption)
        }}
        let toggle = UISwitch()
        toggle.isOn = checked
        toggle.onTintColor = color
        toggle.isEnabled = !disabled
        if let onChange {{
            toggle.addAction(UIAction {{ action in
                let isOn = (action.sender as? UISwitch)?.isOn ?? false
                ActionBus.shared.dispatch(onChange, payload: isOn)
            }}, for: .valueChanged)
        }}
        addArrangedSubview(toggle)
        """
    )


def _compose(t: ResolvedStyle) -> str:
    return textwrap.dedent(
        f"""
        var isOn by remember(checked) {{ mutableStateOf(checked) }}
        Row(
            modifier = modifier.fillMaxWidth(),
            verticalAlignment = Alignment.CenterVertically,
            horizontalArrangement = Arrangement.spacedBy({t.space("sm")}),
        ) {{
            if (label != null) {{
                Text(
                    text = label,
                    color = {t.color("foreground")},
                    fontSize = {t.font_size("body")},
                    modifier = Modifier.weight(1f),
                )
            }}
            Switch(
                checked = isOn,
                onCheckedChange = {{ value ->
                    isOn = value
                    onChange?.let {{ ActionBus.dispatch(it, value) }}
                }},
                enabled = !disabled,
                colors = SwitchDefaults.colors(checkedTrackColor = color),
            )
        }}
        """
    )


def _android(t: ResolvedStyle) -> str:
    return textwrap.dedent(
        f"""
        orientation = HORIZONTAL
        gravity = Gravity.CENTER_VERTICAL
        val toggle = SwitchCompat(context)
        toggle.text = label
        toggle.isChecked = checked
        toggle.isEnabled = !disabled
        toggle.setTextColor({t.color("foreground")})
        toggle.setTextSize(TypedValue.COMPLEX_UNIT_PX, {t.font_size("body")})
        toggle.trackTintList = ColorStateList(
            arrayOf(intArrayOf(android.R.attr.state_checked), intArrayOf()),
            intArrayOf(color, {t.color("disabled")}),
        )
        onChange?.let {{ action ->
            toggle.setOnCheckedChangeListener {{ _, isChecked -> ActionBus.dispatch(action, isChecked) }}
        }}
        addView(toggle, LayoutParams(LayoutParams.MATCH_PARENT, LayoutParams.WRAP_CONTENT))
        """
    )


TEMPLATES = {
    TargetFamily.REACT: UnitTemplate(_react, imports=('import { useState } from "react";',)),
    TargetFamily.SWIFTUI: UnitTemplate(_swiftui, members=_SWIFTUI_MEMBERS),
    TargetFamily.UIKIT: UnitTemplate(_uikit, base="UIStackView"),
    TargetFamily.COMPOSE: UnitTemplate(
        _compose,
        imports=(
            "androidx.compose.foundation.layout.Arrangement",
            "androidx.compose.foundation.layout.Row",
            "androidx.compose.foundation.layout.fillMaxWidth",
            "androidx.compose.material3.Switch",
            "androidx.compose.material3.SwitchDefaults",
            "androidx.compose.material3.Text",
            "androidx.compose.runtime.getValue",
            "androidx.compose.runtime.mutableStateOf",
            "androidx.compose.runtime.remember",
            "androidx.compose.runtime.setValue",
            "androidx.compose.ui.Alignment",
        ),
    ),
    TargetFamily.ANDROID_VIEW: UnitTemplate(
        _android,
        imports=(
            "android.content.res.ColorStateList",
            "android.util.TypedValue",
            "android.view.Gravity",
            "android.widget.LinearLayout",
            "androidx.appcompat.widget.SwitchCompat",
        ),
        base="LinearLayout",
    ),
}

SWITCH = CapsuleDefinition(
    type_id="switch",
    display_name="Switch",
    category=CapsuleCategory.FORMS,
    schema=SCHEMA,
    emitters=build_emitters("switch", TEMPLATES),
    tags=("switch", "toggle", "checkbox", "boolean", "control"),
    description="Binary toggle switch for on/off states",
)
