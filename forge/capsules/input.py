"""Input capsule: a single-line labelled text field."""

import textwrap

from forge.emitters import UnitTemplate, build_emitters
from forge.registry import CapsuleDefinition
from forge.schema import CapsuleCategory, PropertyKind, PropertySchema, TargetFamily
from forge.theme import ResolvedStyle

SCHEMA = (
    PropertySchema("label", PropertyKind.STRING, description="Caption shown above the field"),
    PropertySchema("placeholder", PropertyKind.STRING, description="Hint shown while empty"),
    PropertySchema(
        "inputType",
        PropertyKind.ENUM,
        default="text",
        options=("text", "email", "password", "number"),
        description="Keyboard and masking behavior",
    ),
    PropertySchema("disabled", PropertyKind.BOOLEAN, default=False),
    PropertySchema("onChange", PropertyKind.ACTION, description="Action dispatched with the new value"),
)


def _react(t: ResolvedStyle) -> str:
    return textwrap.dedent(
        f"""
        const id = useId();
        const [value, setValue] = useState("");

        const wrapper: CSSProperties = {{
          display: "flex",
          flexDirection: "column",
          gap: {t.space("xs")},
          width: "100%",
        }};
        const caption: CSSProperties = {{
          fontSize: {t.font_size("caption")},
          color: {t.color("muted")},
        }};
        const field: CSSProperties = {{
          padding: {t.space("sm")},
          fontSize: {t.font_size("body")},
          color: {t.color("foreground")},
          background: {t.color("background")},
          borderWidth: 1,
          borderStyle: "solid",
          borderColor: {t.color("disabled")},
          borderRadius: {t.corner()},
        }};

        return (
          <div style={{wrapper}}>
            {{label ? <label htmlFor={{id}} style={{caption}}>{{label}}</label> : null}}
            <input
              id={{id}}
              type={{inputType}}
              value={{value}}
              placeholder={{placeholder}}
              disabled={{disabled}}
              style={{field}}
              onChange={{(event) => {{
                setValue(event.target.value);
                if (onChange) dispatch(onChange, event.target.value);
              }}}}
            />
          </div>
        );
        """
    )


def _swiftui(t: ResolvedStyle) -> str:
    return textwrap.dedent(
        f"""
        VStack(alignment: .leading, spacing: {t.space("xs")}) {{
            if let label {{
                Text(label)
                    .font(.system(size: {t.font_size("caption")}))
                    .foregroundColor({t.color("muted")})
            }}
            Group {{
                if inputType == .password {{
                    SecureField(placeholder ?? "", text: $value)
                }} else {{
                    TextField(placeholder ?? "", text: $value)
                        .keyboardType(keyboardType)
                        .textInputAutocapitalization(inputType == .text ? .sentences : .never)
                }}
            }}
            .font(.system(size: {t.font_size("body")}))
            .padding({t.space("sm")})
            .overlay(
                RoundedRectangle(cornerRadius: {t.corner()})
                    .stroke({t.color("disabled")}, lineWidth: 1)
            )
            .disabled(disabled)
            .onChange(of: value) {{ newValue in
                if let onChange {{
                    ActionBus.shared.dispatch(onChange, payload: newValue)
                }}
            }}
        }}
        """
    )


_KEYBOARD = textwrap.dedent(
    """
    private var keyboardType: UIKeyboardType {
        switch inputType {
        case .email: return .emailAddress
        case .number: return .decimalPad
        default: return .default
        }
    }
    """
)

_SWIFTUI_MEMBERS = textwrap.dedent(
    """
    @State var value = ""
    """
) + _KEYBOARD


def _uikit(t: ResolvedStyle) -> str:
    return textwrap.dedent(
        f"""
        axis = .vertical
        spacing = {t.space("xs")}
        if let label {{
            let caption = UILabel()
            caption.text = label
            caption.font = .systemFont(ofSize: {t.font_size("caption")})
            caption.textColor = {t.color("muted")}
            addArrangedSubview(caption)
        }}
        let field = UITextField()
        field.placeholder = placeholder
        field.font = .systemFont(ofSize: {t.font_size("body")})
        field.borderStyle = .roundedRect
        field.keyboardType = keyboardType
        field.isSecureTextEntry = inputType == .password
        field.autocapitalizationType = inputType == .text ? .sentences : .none
        field.isEnabled = !disabled
        if let onChange {{
            field.addAction(UIAction {{ action in
                let text = (action.sender as? UITextField)?.text ?? ""
                ActionBus.shared.dispatch(onChange, payload: text)
            }}, for: .editingChanged)
        }}
        addArrangedSubview(field)
        """
    )


def _compose(t: ResolvedStyle) -> str:
    return textwrap.dedent(
        f"""
        var value by remember {{ mutableStateOf("") }}
        OutlinedTextField(
            value = value,
            onValueChange = {{ newValue ->
                value = newValue
                onChange?.let {{ ActionBus.dispatch(it, newValue) }}
            }},
            label = if (label != null) {{ {{ Text(label) }} }} else null,
            placeholder = if (placeholder != null) {{ {{ Text(placeholder) }} }} else null,
            enabled = !disabled,
            singleLine = true,
            textStyle = TextStyle(fontSize = {t.font_size("body")}),
            visualTransformation = if (inputType == ForgeInputInputType.Password) {{
                PasswordVisualTransformation()
            }} else {{
                VisualTransformation.None
            }},
            keyboardOptions = KeyboardOptions(
                keyboardType = when (inputType) {{
                    ForgeInputInputType.Text -> KeyboardType.Text
                    ForgeInputInputType.Email -> KeyboardType.Email
                    ForgeInputInputType.Password -> KeyboardType.Password
                    ForgeInputInputType.Number -> KeyboardType.Decimal
                }},
            ),
            shape = RoundedCornerShape({t.corner()}),
            modifier = modifier.fillMaxWidth(),
        )
        """
    )


def _android(t: ResolvedStyle) -> str:
    return textwrap.dedent(
        f"""
        orientation = VERTICAL
        if (label != null) {{
            addView(TextView(context).apply {{
                text = label
                setTextColor({t.color("muted")})
                setTextSize(TypedValue.COMPLEX_UNIT_PX, {t.font_size("caption")})
            }})
        }}
        val field = EditText(context)
        field.hint = placeholder
        field.isEnabled = !disabled
        field.setTextSize(TypedValue.COMPLEX_UNIT_PX, {t.font_size("body")})
        field.inputType = when (inputType) {{
            "email" -> InputType.TYPE_CLASS_TEXT or InputType.TYPE_TEXT_VARIATION_EMAIL_ADDRESS
            "password" -> InputType.TYPE_CLASS_TEXT or InputType.TYPE_TEXT_VARIATION_PASSWORD
            "number" -> InputType.TYPE_CLASS_NUMBER or InputType.TYPE_NUMBER_FLAG_DECIMAL
            else -> InputType.TYPE_CLASS_TEXT
        }}
        onChange?.let {{ action ->
            field.doAfterTextChanged {{ ActionBus.dispatch(action, it?.toString().orEmpty()) }}
        }}
        addView(field)
        """
    )


TEMPLATES = {
    TargetFamily.REACT: UnitTemplate(_react, imports=('import { useId, useState } from "react";',)),
    TargetFamily.SWIFTUI: UnitTemplate(_swiftui, members=_SWIFTUI_MEMBERS),
    TargetFamily.UIKIT: UnitTemplate(_uikit, members=_KEYBOARD, base="UIStackView"),
    TargetFamily.COMPOSE: UnitTemplate(
        _compose,
        imports=(
            "androidx.compose.foundation.layout.fillMaxWidth",
            "androidx.compose.foundation.shape.RoundedCornerShape",
            "androidx.compose.foundation.text.KeyboardOptions",
            "androidx.compose.material3.OutlinedTextField",
            "androidx.compose.material3.Text",
            "androidx.compose.runtime.getValue",
            "androidx.compose.runtime.mutableStateOf",
            "androidx.compose.runtime.remember",
            "androidx.compose.runtime.setValue",
            "androidx.compose.ui.text.TextStyle",
            "androidx.compose.ui.text.input.KeyboardType",
            "androidx.compose.ui.text.input.PasswordVisualTransformation",
            "androidx.compose.ui.text.input.VisualTransformation",
        ),
    ),
    TargetFamily.ANDROID_VIEW: UnitTemplate(
        _android,
        imports=(
            "android.text.InputType",
            "android.util.TypedValue",
            "android.widget.EditText",
            "android.widget.LinearLayout",
            "android.widget.TextView",
            "androidx.core.widget.doAfterTextChanged",
        ),
        base="LinearLayout",
    ),
}

INPUT = CapsuleDefinition(
    type_id="input",
    display_name="Input",
    category=CapsuleCategory.FORMS,
    schema=SCHEMA,
    emitters=build_emitters("input", TEMPLATES),
    tags=("input", "text field", "form", "email", "password"),
    description="Labelled single-line text field",
)
