"""Resource catalog — static reference documents served over ``resources/read``.

Bodies are rendered from fixed templates each time they are read; nothing is
stored, and two reads of the same URI always produce identical text.
"""

from __future__ import annotations

from collections.abc import Callable

from coderabbit_mcp.protocol.models import ResourceDescriptor

SCHEME = "coderabbit"

SAMPLE_CONFIG = ResourceDescriptor(
    uri=f"{SCHEME}://config/sample",
    name="Sample CodeRabbit Configuration",
    description="Example .coderabbit.yaml configuration file",
    mime_type="application/yaml",
)

COMMANDS_HELP = ResourceDescriptor(
    uri=f"{SCHEME}://commands/help",
    name="CodeRabbit Commands Reference",
    description="Available CodeRabbit commands and their usage",
    mime_type="text/markdown",
)

ASTGREP_EXAMPLES = ResourceDescriptor(
    uri=f"{SCHEME}://tools/astgrep",
    name="AST-Grep Rules Examples",
    description="Example AST-Grep rules for code analysis",
    mime_type="application/yaml",
)

ENV_TEMPLATE = ResourceDescriptor(
    uri=f"{SCHEME}://env/template",
    name="Environment Configuration Template",
    description="Template for CodeRabbit self-hosted .env file",
    mime_type="text/plain",
)

RESOURCES: tuple[ResourceDescriptor, ...] = (
    SAMPLE_CONFIG,
    COMMANDS_HELP,
    ASTGREP_EXAMPLES,
    ENV_TEMPLATE,
)


def render_sample_config() -> str:
    return """\
# .coderabbit.yaml - Sample Configuration

# Remote configuration (optional)
remote_config:
  url: "https://your-config-location/.coderabbit.yaml"

# Review settings
reviews:
  # Path-based instructions
  path_instructions:
    - path: "**/*.js"
      instructions: |
        Review the JavaScript code against the Google JavaScript style guide and point out any mismatches
    - path: "tests/**.*"
      instructions: |
        Review the following unit test code written using the Mocha test library. Ensure that:
        - The code adheres to best practices associated with Mocha.
        - Descriptive test names are used to clearly convey the intent of each test.
    - path: "**/*.ts"
      instructions: |
        Review TypeScript code for type safety and modern practices.

  # Tools configuration
  tools:
    ast-grep:
      essential_rules: true
      rule_dirs:
        - "custom-rules"
      util_dirs:
        - "utils"
      packages:
        - "my-awesome-org/my-awesome-package"

# Code generation settings
code_generation:
  docstrings:
    path_instructions:
      - path: "**/*.ts"
        instructions: |
          End all docstrings with a notice that says "Auto-generated by CodeRabbit.".
          Do not omit the closing tags; the docstring must be valid."""


def render_commands_help() -> str:
    return """\
# CodeRabbit Commands Reference

## Interactive Commands

Use these commands in pull request comments to interact with CodeRabbit:

### Code Generation
`@coderabbitai generate docstrings`
- Automatically generates and commits missing docstrings

### Review Interaction
`@coderabbitai explain reasoning`
- Ask CodeRabbit to explain its review suggestions

### Context Provision
`@coderabbitai do not complain about [issue] here, it is handled [elsewhere]`
- Provide context for specific code sections

### Rule Management
`@coderabbitai always remember to [rule]`
- Set persistent rules for future reviews

### Clarification
`@coderabbitai Why do all of these functions need docstrings?`
- Ask for clarification on specific suggestions

## Configuration Commands

### Path-based Instructions
Configure review instructions for specific file patterns in `.coderabbit.yaml`:

```yaml
reviews:
  path_instructions:
    - path: "**/*.js"
      instructions: |
        Review against Google JavaScript style guide
```

### Tool Configuration
Enable and configure analysis tools:

```yaml
reviews:
  tools:
    ast-grep:
      essential_rules: true
      rule_dirs: ["rules"]
```"""


def render_astgrep_examples() -> str:
    return """\
# AST-Grep Rules Examples

# Restrict console usage in TypeScript
id: no-console-except-error
language: typescript
message: "No console.log allowed except console.error in catch blocks"
rule:
  any:
    - pattern: console.error($$$)
      not:
        inside:
          kind: catch_clause
          stopBy: end
    - pattern: console.$METHOD($$$)
constraints:
  METHOD:
    regex: "log|debug|warn"

---

# Disallow imports without extensions in JavaScript
id: find-import-file
language: js
message: "Importing files without an extension is not allowed"
rule:
  regex: "/[^.]+[^/]$/"
  kind: string_fragment
  any:
    - inside:
        stopBy: end
        kind: import_statement
    - inside:
        stopBy: end
        kind: call_expression
        has:
          field: function
          regex: "^import$"

---

# Utility rule for literals
utils:
  is-literal:
    any:
      - kind: string
      - kind: number
      - kind: boolean

rule:
  matches: is-literal"""


def render_env_template() -> str:
    return """\
# CodeRabbit Self-Hosted Environment Configuration

# LLM Provider Configuration
LLM_PROVIDER=openai
LLM_TIMEOUT=360000
OPENAI_API_KEYS=<your-openai-key>
OPENAI_BASE_URL=<optional-base-url>
OPENAI_ORG_ID=<optional-org-id>
OPENAI_PROJECT_ID=<optional-project-id>

# Alternative: Azure OpenAI
# LLM_PROVIDER=azure-openai
# AZURE_OPENAI_ENDPOINT=<endpoint>
# AZURE_OPENAI_API_KEY=<key>
# AZURE_GPT41MINI_DEPLOYMENT_NAME=<deployment>
# AZURE_O4MINI_DEPLOYMENT_NAME=<deployment>
# AZURE_O3_DEPLOYMENT_NAME=<deployment>

# Alternative: AWS Bedrock
# LLM_PROVIDER=bedrock-anthropic
# AWS_ACCESS_KEY_ID=<key>
# AWS_SECRET_ACCESS_KEY=<secret>
# AWS_REGION=<region>

# Alternative: Anthropic
# LLM_PROVIDER=anthropic
# ANTHROPIC_API_KEYS=<key>

# System Configuration
TEMP_PATH=/cache

# Platform Configuration (choose one)
# For GitHub:
SELF_HOSTED=github
GH_WEBHOOK_SECRET=<webhook-secret>
GITHUB_APP_CLIENT_ID=<client-id>
GITHUB_APP_CLIENT_SECRET=<client-secret>
GITHUB_APP_ID=<app-id>
GITHUB_APP_PEM_FILE=<pem-content>

# For GitLab:
# SELF_HOSTED=gitlab
# GITLAB_BOT_TOKEN=<token>
# GITLAB_WEBHOOK_SECRET=<secret>

# For Azure DevOps:
# SELF_HOSTED=azure-devops
# AZURE_DEVOPS_BOT_TOKEN=<token>
# AZURE_DEVOPS_BOT_USERNAME=<username>

# For Bitbucket:
# SELF_HOSTED=bitbucket-server
# BITBUCKET_SERVER_URL=<url>/rest
# BITBUCKET_SERVER_WEBHOOK_SECRET=<secret>
# BITBUCKET_SERVER_BOT_TOKEN=<token>
# BITBUCKET_SERVER_BOT_USERNAME=<username>

# CodeRabbit Licensing
CODERABBIT_LICENSE_KEY=<license-key>
CODERABBIT_API_KEY=<api-key>

# Optional Features
ENABLE_METRICS=true
ENABLE_LEARNINGS=true
OBJECT_STORE_URI=<s3://bucket/path>

# Integration (optional)
JIRA_HOST=<jira-url>
JIRA_PAT=<jira-token>
LINEAR_PAT=<linear-token>

# Web Search (optional)
ENABLE_WEB_SEARCH=true
PERPLEXITY_API_KEY=<perplexity-key>

# Proxy Configuration (optional)
HTTP_PROXY=<http-proxy>
HTTPS_PROXY=<https-proxy>
NO_PROXY=<no-proxy>"""


RENDERERS: dict[str, Callable[[], str]] = {
    SAMPLE_CONFIG.uri: render_sample_config,
    COMMANDS_HELP.uri: render_commands_help,
    ASTGREP_EXAMPLES.uri: render_astgrep_examples,
    ENV_TEMPLATE.uri: render_env_template,
}
