"""
Component generation instructions.

Fixed instruction suffixes appended to every generation prompt. The
override variant is used when the request targets a single element.

Dependencies: None
System role: Prompt templates for component generation
"""

REGENERATE_INSTRUCTIONS = """IMPORTANT:
- Only output a single valid React functional component in a ```jsx code block.
- Do NOT include any import or export statements.
- Use React hooks like React.useState() directly (do NOT import useState).
- Do NOT include any explanations, comments, or extra text.
- If CSS is needed, output it in a separate ```css code block, and use matching className attributes in the JSX.
- Do NOT output any code or explanation for other languages or frameworks.
- The code must be ready to run in a React sandbox like react-live."""

OVERRIDE_INSTRUCTIONS = """IMPORTANT:
- Change ONLY the element the request refers to; keep every other element, prop, handler and className exactly as it is.
- Return the COMPLETE updated component in a single ```jsx code block, not a fragment or a diff.
- If styles change, return the COMPLETE updated stylesheet in a separate ```css code block.
- Do NOT include any import or export statements.
- Use React hooks like React.useState() directly (do NOT import useState).
- Do NOT include any explanations, comments, or extra text.
- The code must be ready to run in a React sandbox like react-live."""

OVERRIDE_REQUEST_TEMPLATE = (
    'Modify the element with id "{element_id}" in the following React component. '
    "{instruction}. Only return the updated JSX and CSS code blocks."
)
