"""
Django management command to render a Learning Trail PDF to disk.

Runs a JSON request payload (same shape as POST /api/generate-pdf) through
the render pipeline outside of HTTP, which is handy when debugging the
Chromium setup of a host.
"""

import asyncio
import json
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from core.printing import PdfRenderService, RenderRequest
from core.services.exceptions import InvalidRenderRequest, RenderError


class Command(BaseCommand):
    help = 'Render a Learning Trail PDF from a JSON payload file'

    def add_arguments(self, parser):
        parser.add_argument('payload', help='Path to a JSON file with the request payload')
        parser.add_argument(
            '-o', '--output',
            help='Output path (defaults to the download filename in the current directory)',
        )

    def handle(self, *args, **options):
        """Execute the command."""
        payload_path = Path(options['payload'])

        try:
            payload = json.loads(payload_path.read_text(encoding='utf-8'))
        except (OSError, json.JSONDecodeError) as e:
            raise CommandError(f"Could not read payload {payload_path}: {e}")

        if not isinstance(payload, dict):
            raise CommandError("Payload must be a JSON object")

        try:
            request = RenderRequest.from_payload(payload)
        except InvalidRenderRequest as e:
            raise CommandError(str(e))

        self.stdout.write(f"Rendering Learning Trail for {request.kid_name}...")

        try:
            result = asyncio.run(PdfRenderService().render(request))
        except RenderError as e:
            raise CommandError(f"Failed to generate PDF: {e}")

        output_path = Path(options['output'] or result.filename)
        output_path.write_bytes(result.pdf_bytes)

        self.stdout.write(
            self.style.SUCCESS(f"✓ PDF written to {output_path} ({len(result)} bytes)")
        )
