"""
Prompt templates and structured reply schemas for every oracle call.

Each call pairs a template with a pydantic model passed to Gemini as
`response_schema`, so replies arrive as JSON with known fields. The
decoders downstream still tolerate replies that ignore the schema.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ExecutionReply(BaseModel):
    output: str = Field(description="Console output produced so far, exactly as a terminal would show it.")
    pendingInput: bool = Field(
        default=False,
        description="True when the program is paused waiting for a line of standard input.",
    )
    image: Optional[str] = Field(
        default=None,
        description="A data URI of any image or plot the program would display, otherwise null.",
    )


class SummaryReply(BaseModel):
    name: str = Field(description="A short, descriptive name for the code (3-5 words max).")


class GenerationReply(BaseModel):
    content: str = Field(description="The generated code or the answer to the question.")
    kind: Optional[str] = Field(
        default=None,
        description='"code" when content is a runnable program, "text" when it is a prose answer.',
    )


class CompletionReply(BaseModel):
    completionSuggestions: list[str] = Field(description="Code completion suggestions.")


class ErrorReport(BaseModel):
    errors: list[str] = Field(description="Errors found in the code, with line numbers where possible.")
    highlightedCode: str = Field(description="The code with error locations visibly marked.")


EXECUTION_SYSTEM = """You are a code execution engine. You simulate running a program and report \
exactly what its console would show. If the code has syntax errors or would cause a runtime error, \
the output is the error message the real toolchain would print.

Whenever the program performs a blocking read of one line of standard input, stop at that point:
- the output ends with the prompt text printed so far, followed by the literal token {marker}
- set pendingInput to true
- do not invent the user's answer and do not continue past the read.
Never emit {marker} anywhere else."""

EXECUTION_FRESH = """Language: {language}
Code:
```{language}
{code}
```

Run the program from the start and return only its console output."""

EXECUTION_RESUME = """The user typed the following line at the paused read:
```
{stdin}
```
Continue the same program from exactly where it paused, using that line as the value read. \
Return only the console output produced after the read; do not repeat earlier output."""

SUMMARY = """You are an expert programmer. Your task is to analyze a code snippet and provide a short, \
descriptive name for it. The name should be at most 5 words and summarize the code's purpose.

Examples:
- "Check for palindrome number"
- "Simple web server"
- "Fibonacci sequence generator"
- "Read and print file contents"

Language: {language}

Code:
```{language}
{code}
```

Generate a descriptive name for the code above."""

GENERATION = """You are an expert programmer and a helpful coding assistant. Your task is to either \
generate code or answer a question based on the user's request.

Follow these instructions carefully:
1. Analyze the user's prompt to understand their requirements.
2. Determine if the user is asking a question or requesting code.
   - If the user is asking a question (e.g., "how do I...", "what is...", "explain..."), provide a \
clear, concise natural language answer and set kind to "text".
   - If the user is requesting code generation, generate a complete, runnable program and set kind \
to "code". Do not provide snippets or incomplete code.
3. Unless the user explicitly asks for a function, generate a script that can be executed directly.
4. Generated code must be in the specified language, syntactically correct, and properly indented \
across multiple lines.
5. Generated code must contain ONLY the raw code, without explanations or markdown fences.

Language: {language}
User Request: {prompt}"""

COMPLETION = """You are a code autocompletion assistant. Given the programming language and the \
current code snippet, provide a list of code completion suggestions.

Language: {language}
Code Snippet:
{code}

Completion Suggestions:"""

ERROR_DETECTION = """You are a code error detection and highlighting tool. Given the following code \
and language, detect any errors and highlight them in the code. Return a list of errors and the \
highlighted code.

Language: {language}
Code:
```{language}
{code}
```

Errors should be specific and include the line number if possible. The highlighted code should \
visually indicate the error locations."""
