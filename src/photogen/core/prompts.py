"""Trigger-word prompt composition.

A fine-tuned model only produces the user's subject when its trigger word
appears in the prompt. :func:`compose_prompt` prepends it when missing.

Usage
-----
::

    >>> compose_prompt("a photo of a dog", "sks")
    'sks, a photo of a dog'
    >>> compose_prompt("SKS on a beach", "sks")
    'SKS on a beach'
"""

from __future__ import annotations


def compose_prompt(prompt: str, trigger_word: str | None = None) -> str:
    """Prepend *trigger_word* to *prompt* unless it already appears.

    The presence check is a case-insensitive substring match, so applying
    this function repeatedly never stacks the trigger word.

    Args:
        prompt: User-supplied prompt text.
        trigger_word: Token the trained model associates with the subject.
            ``None`` or an empty string leaves the prompt untouched.

    Returns:
        The composed prompt.
    """
    if not trigger_word:
        return prompt
    if trigger_word.lower() in prompt.lower():
        return prompt
    return f"{trigger_word}, {prompt}"
