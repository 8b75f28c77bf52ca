#!/usr/bin/env python3
# =============================================================================
# scripts/validate_env.py - AI Provider Environment Validation
# =============================================================================
# Validates AI provider environment variables and prints a report.
# Exits 0 when at least one provider is usable, 1 otherwise, so it can
# gate deployments.
#
# Usage:
#   python scripts/validate_env.py
#
# Reads the process environment plus a .env file in the working directory.
# Does not need Supabase credentials.
# =============================================================================

import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

from core.models.provider import ProviderEnvironment
from core.providers.env_validation import format_validation_report, get_validation_summary


def main() -> int:
    """Validate provider configuration and print the results."""
    load_dotenv()

    print("Validating AI provider environment configuration...")
    print()

    summary = get_validation_summary(ProviderEnvironment.from_env())
    print(format_validation_report(summary))
    print()

    if summary.has_valid_provider:
        print("Success: At least one AI provider is properly configured!")
        print(f"Configured providers: {', '.join(p.value for p in summary.configured_providers)}")
        if summary.total_warnings > 0:
            print(f"Note: There are {summary.total_warnings} warning(s) that should be addressed.")
        return 0

    print("Error: No AI provider is properly configured.")
    print("Please configure at least one provider:")
    print("   - Azure OpenAI: Set AZURE_RESOURCE_NAME and AZURE_API_KEY")
    print("   - Groq: Set GROQ_API_KEY")
    print("   - Vertex AI: Set GOOGLE_VERTEX_PROJECT and GOOGLE_VERTEX_LOCATION")
    return 1


if __name__ == "__main__":
    sys.exit(main())
