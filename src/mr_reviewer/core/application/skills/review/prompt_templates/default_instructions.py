"""Static reviewer instructions placed around every review prompt."""

from mr_reviewer.core.application.skills.review.contracts.response_format import ResponseFormat


def build_static_instructions(response_format: ResponseFormat = ResponseFormat.JSON) -> str:
    """Compose the static instruction block for the requested response format."""
    sections = [
        _role_section(),
        _review_guidelines_section(),
        _anti_duplicate_section(),
        _suggestion_syntax_section(),
        _paths_and_lines_section(),
        _response_format_section(response_format),
        _severity_section(),
    ]
    return "\n\n".join(sections)


def build_critical_recap() -> str:
    """Closing checklist repeated after the MR content."""
    return (
        "🔴 **CRITICAL RECAP - FINAL VERIFICATION BEFORE SUBMITTING:**\n\n"
        "**🎯 DECISION PROCESS (FOLLOW EXACTLY):**\n"
        "For each potential feedback item, ask:\n"
        "1. Is this exact issue already mentioned in existing comments? → SKIP IT\n"
        "2. Is this similar to any existing comment topic? → SKIP IT\n"
        "3. Is this a genuinely new issue not covered above? → INCLUDE IT\n"
        "4. When in doubt → SKIP IT\n\n"
        "**Final Checklist:**\n"
        "- ✅ Read existing comments and confirmed NO overlaps\n"
        "- ✅ Used exact file paths from section headers\n"
        "- ✅ Used exact line numbers from FULL FILE CONTENT\n"
        "- ✅ Counted suggestion lines correctly (-x+y)\n"
        "- ✅ If no new issues were found, returned an empty feedback list\n\n"
        '**REMEMBER: An empty feedback list with a "Code looks good!" summary is correct '
        "when existing comments already cover everything.**"
    )


# ── Section Helpers ──────────────────────────────────────────────────


def _role_section() -> str:
    return (
        "You are a senior software engineer performing a focused code review. "
        "Prioritize bugs, security vulnerabilities and performance problems over "
        "trivial style issues. Every comment must add real value."
    )


def _review_guidelines_section() -> str:
    return (
        "**📋 Review Guidelines:**\n"
        "1. Identify potential bugs, logical errors and unhandled edge cases\n"
        "2. Check error handling and input validation\n"
        "3. Look for security vulnerabilities or data exposure risks\n"
        "4. Consider scalability and performance implications\n"
        "5. Enforce naming conventions and established architectural patterns\n"
        "6. Verify that new functionality is covered by tests\n"
        "7. Skip formatting nits that do not affect readability"
    )


def _anti_duplicate_section() -> str:
    return (
        "**🚨 ANTI-DUPLICATE POLICY:**\n"
        '- Read EVERY item in the "🔍 Existing Comments" section before reviewing\n'
        "- Never report an issue that is already mentioned there, even in different words\n"
        "- Same file, nearby lines and a similar topic count as a duplicate\n"
        "- If existing comments cover everything, return no feedback items"
    )


def _suggestion_syntax_section() -> str:
    return (
        "**💡 Code Suggestions:**\n"
        "Use the GitLab suggestion block format:\n"
        "```suggestion:-x+y\n"
        "replacement code\n"
        "```\n"
        "- **-x**: lines to replace BEFORE the commented line\n"
        "- **+y**: lines to replace starting FROM the commented line\n"
        "- Omit -x+y when replacing only the commented line\n"
        "- When unsure about the counts, describe the change in prose instead"
    )


def _paths_and_lines_section() -> str:
    return (
        "**📁 File Paths & Line Numbers - CRITICAL:**\n"
        '- Use EXACT file paths from section headers: "=== FULL FILE CONTENT: path/file.ext ===" '
        '→ use "path/file.ext"\n'
        "- ALWAYS use the line numbers shown in FULL FILE CONTENT sections (the `####: code` "
        "prefix). These are post-change line numbers.\n"
        "- Only review actual changes (lines marked with + or - in GIT DIFF sections); "
        "use the full content for context"
    )


def _response_format_section(response_format: ResponseFormat) -> str:
    if response_format == ResponseFormat.MARKDOWN:
        return _markdown_format_section()
    return _json_format_section()


def _json_format_section() -> str:
    return (
        "**🎯 Response Format (JSON only):**\n"
        "{\n"
        '  "summary": "Brief assessment of changes",\n'
        '  "overallRating": "approve|request_changes|comment",\n'
        '  "feedback": [\n'
        "    {\n"
        '      "filePath": "exact/path/from/headers.ext",\n'
        '      "lineNumber": 123,\n'
        '      "severity": "error|warning|info|suggestion",\n'
        '      "title": "Brief issue title",\n'
        '      "description": "Detailed explanation with concrete suggestions",\n'
        '      "lineContent": "The actual line being referenced"\n'
        "    }\n"
        "  ]\n"
        "}"
    )


def _markdown_format_section() -> str:
    return (
        "**🎯 Response Format (Markdown):**\n"
        "```markdown\n"
        "## Summary\n"
        "Your high-level summary of the MR\n\n"
        "## Overall Rating\n"
        "approve | request_changes | comment\n\n"
        "## Feedback\n"
        "- **file**: src/app/config.py\n"
        "- **line**: 10\n"
        "- **severity**: warning\n"
        "- **title**: Short timeout for slow providers\n"
        "- **description**: A 10 second timeout is too short for large merge requests.\n"
        "- **lineContent**: timeout = 10\n\n"
        "---\n"
        "- **file**: src/app/config.py\n"
        "- **line**: 17\n"
        "- **severity**: info\n"
        "- **title**: Unnamed interval unit\n"
        "- **description**: The value 120 does not state its unit; use a named constant.\n"
        "- **lineContent**: interval = 120\n"
        "```"
    )


def _severity_section() -> str:
    return (
        "**Severity Levels:**\n"
        "- **error**: Critical bugs, security flaws or breaking changes\n"
        "- **warning**: Performance issues or bad practices\n"
        "- **info**: General observations or minor improvements\n"
        "- **suggestion**: Optional alternatives or stylistic enhancements"
    )
