"""
HTML Report Generator for uicov.

Generates a self-contained HTML page with the coverage summary and every
discovered element flagged as covered or uncovered.
"""

from datetime import datetime
from pathlib import Path

from jinja2 import Environment, Template

from uicov.coverage.registry import CoverageReport

# Embedded HTML template with dark mode support
HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{{ report_title }}</title>
    <style>
        :root {
            --bg-primary: #ffffff;
            --bg-secondary: #f5f5f5;
            --text-primary: #333333;
            --text-secondary: #666666;
            --border-color: #ddd;
            --uncovered: #dc2626;
            --unmatched: #f59e0b;
            --accent: #3b82f6;
            --success: #22c55e;
            --shadow: rgba(0, 0, 0, 0.1);
        }

        @media (prefers-color-scheme: dark) {
            :root {
                --bg-primary: #1f2937;
                --bg-secondary: #111827;
                --text-primary: #f3f4f6;
                --text-secondary: #9ca3af;
                --border-color: #374151;
                --shadow: rgba(0, 0, 0, 0.3);
            }
        }

        * {
            margin: 0;
            padding: 0;
            box-sizing: border-box;
        }

        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Oxygen, Ubuntu, Cantarell, sans-serif;
            background-color: var(--bg-secondary);
            color: var(--text-primary);
            line-height: 1.6;
            padding: 20px;
        }

        .container {
            max-width: 1200px;
            margin: 0 auto;
        }

        header, .section {
            background: var(--bg-primary);
            padding: 25px;
            border-radius: 8px;
            margin-bottom: 25px;
            box-shadow: 0 2px 4px var(--shadow);
        }

        .metadata {
            color: var(--text-secondary);
            font-size: 0.9em;
        }

        h2 {
            margin-bottom: 20px;
            padding-bottom: 10px;
            border-bottom: 2px solid var(--border-color);
        }

        .stats-grid {
            display: grid;
            grid-template-columns: repeat(auto-fit, minmax(180px, 1fr));
            gap: 20px;
            margin-bottom: 25px;
        }

        .stat-card {
            background: var(--bg-secondary);
            padding: 20px;
            border-radius: 6px;
            text-align: center;
            border: 1px solid var(--border-color);
        }

        .stat-value {
            font-size: 2.2em;
            font-weight: bold;
        }

        .stat-label {
            color: var(--text-secondary);
            font-size: 0.9em;
            margin-top: 5px;
        }

        .coverage-bar {
            width: 100%;
            height: 30px;
            background: var(--bg-secondary);
            border-radius: 15px;
            overflow: hidden;
        }

        .coverage-fill {
            height: 100%;
            background: linear-gradient(90deg, var(--success), var(--accent));
            color: white;
            font-weight: bold;
            font-size: 0.85em;
            display: flex;
            align-items: center;
            justify-content: center;
        }

        table {
            width: 100%;
            border-collapse: collapse;
        }

        th, td {
            text-align: left;
            padding: 8px 12px;
            border-bottom: 1px solid var(--border-color);
        }

        td.identifier {
            font-family: monospace;
            word-break: break-all;
        }

        .badge {
            padding: 2px 10px;
            border-radius: 12px;
            font-size: 0.8em;
            font-weight: 600;
            text-transform: uppercase;
            color: white;
        }

        .badge-covered { background: var(--success); }
        .badge-uncovered { background: var(--uncovered); }
        .badge-unmatched { background: var(--unmatched); }

        .empty-state {
            text-align: center;
            padding: 40px;
            color: var(--text-secondary);
        }

        footer {
            text-align: center;
            padding: 20px;
            color: var(--text-secondary);
            font-size: 0.9em;
        }
    </style>
</head>
<body>
    <div class="container">
        <header>
            <h1>{{ report_title }}</h1>
            <div class="metadata">
                <div>Generated: {{ generation_time }}</div>
                <div>Session: {{ report.session_id }}</div>
            </div>
        </header>

        <section class="section">
            <h2>Coverage Summary</h2>
            <div class="stats-grid">
                <div class="stat-card">
                    <div class="stat-value" id="total-elements">{{ report.total_discovered }}</div>
                    <div class="stat-label">Total Elements</div>
                </div>
                <div class="stat-card">
                    <div class="stat-value" id="covered-elements">{{ report.total_exercised }}</div>
                    <div class="stat-label">Covered Elements</div>
                </div>
                <div class="stat-card">
                    <div class="stat-value" id="coverage-percentage">{{ "%.2f"|format(report.percentage) }}%</div>
                    <div class="stat-label">Coverage</div>
                </div>
                <div class="stat-card">
                    <div class="stat-value" id="uncovered-elements">{{ report.uncovered_count }}</div>
                    <div class="stat-label">Uncovered Elements</div>
                </div>
            </div>
            <div class="coverage-bar">
                <div class="coverage-fill" style="width: {{ report.percentage }}%">
                    {{ "%.1f"|format(report.percentage) }}%
                </div>
            </div>
        </section>

        <section class="section">
            <h2>Discovered Elements</h2>
            {% if elements %}
            <table>
                <thead>
                    <tr><th>Element</th><th>Status</th></tr>
                </thead>
                <tbody>
                    {% for identifier, covered in elements %}
                    <tr>
                        <td class="identifier">{{ identifier }}</td>
                        <td>
                            <span class="badge badge-{{ 'covered' if covered else 'uncovered' }}">
                                {{ 'covered' if covered else 'uncovered' }}
                            </span>
                        </td>
                    </tr>
                    {% endfor %}
                </tbody>
            </table>
            {% else %}
            <div class="empty-state">
                <p>No interactive elements were discovered.</p>
            </div>
            {% endif %}
        </section>

        {% if report.unmatched_items %}
        <section class="section">
            <h2>Exercised but Not Discovered</h2>
            <table>
                <tbody>
                    {% for identifier in report.unmatched_items %}
                    <tr>
                        <td class="identifier">{{ identifier }}</td>
                        <td><span class="badge badge-unmatched">unmatched</span></td>
                    </tr>
                    {% endfor %}
                </tbody>
            </table>
        </section>
        {% endif %}

        <footer>
            Generated by uicov - UI interaction coverage
        </footer>
    </div>
</body>
</html>
"""


class HTMLReportGenerator:
    """
    Generate HTML coverage reports.

    Creates a self-contained page listing every discovered element with its
    coverage status, plus the summary numbers.
    """

    def __init__(self, template: str | None = None):
        """
        Initialize HTML report generator.

        Args:
            template: Optional custom Jinja2 template string
        """
        self.template_str = template or HTML_TEMPLATE
        self.env = Environment(autoescape=True)
        self.template: Template = self.env.from_string(self.template_str)

    def render(self, report: CoverageReport, report_title: str = "UI Coverage Report") -> str:
        """Render the report to an HTML string."""
        elements = [(identifier, report.is_covered(identifier)) for identifier in sorted(report.discovered)]
        return self.template.render(
            report_title=report_title,
            generation_time=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            report=report,
            elements=elements,
        )

    def generate(
        self,
        output_path: str | Path,
        report: CoverageReport,
        report_title: str = "UI Coverage Report",
        create_dirs: bool = True,
    ) -> Path:
        """
        Generate HTML report and write to file.

        Args:
            output_path: Path to write HTML report
            report: Coverage snapshot to render
            report_title: Title for the report
            create_dirs: Create missing parent directories

        Returns:
            The path written

        Raises:
            OSError: If the file cannot be written
        """
        html_content = self.render(report, report_title=report_title)

        output_path = Path(output_path)
        if create_dirs:
            output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html_content, encoding="utf-8")
        return output_path
