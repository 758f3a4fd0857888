#!/usr/bin/env python
"""
Agent Signup Example

Lets the Claude Agent SDK plan a signup workflow and drive the browser
tools. The browser is closed when the run ends, whatever the outcome.

Usage:
    python examples/agent_signup.py

Requirements:
    - ANTHROPIC_API_KEY environment variable set
    - Browser toolset installed: pip install -e .
"""

import asyncio

from browser_toolset.agent import create_agent

TASK = """Automate Sign Up on https://ui.chaicode.com with:
First Name: Jane
Last Name: Doe
Email: jane@example.com
Password: s3cret-pass
Confirm Password: s3cret-pass

Take a screenshot before and after submitting the form."""


async def main():
    """Run the signup task and print every SDK message."""
    async with create_agent(max_turns=40) as agent:
        async for message in agent.run_stream(TASK):
            print(message)


if __name__ == "__main__":
    asyncio.run(main())
