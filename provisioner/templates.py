# Page templates for the generated static apps.
# Placeholders are %UPPER_CASE% tokens, filled in a single regex pass by provisioner.generator._fill.

BOOTSTRAP_CSS = "https://cdn.jsdelivr.net/npm/bootstrap@5.3.0/dist/css/bootstrap.min.css"

CAPTCHA_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Captcha Solver</title>
    <link href="%BOOTSTRAP_CSS%" rel="stylesheet">
</head>
<body>
    <div class="container mt-5">
        <div class="row justify-content-center">
            <div class="col-md-8">
                <div class="card">
                    <div class="card-header">
                        <h2>Captcha Solver</h2>
                    </div>
                    <div class="card-body">
                        <div id="captcha-container" class="text-center mb-3">
                            <img id="captcha-image" src="" alt="Captcha Image" class="img-fluid" style="max-width: 300px;">
                        </div>
                        <div class="mb-3">
                            <label for="captcha-url" class="form-label">Captcha URL:</label>
                            <input type="url" class="form-control" id="captcha-url" placeholder="Enter captcha image URL">
                        </div>
                        <div class="mb-3">
                            <button class="btn btn-primary" onclick="loadCaptcha()">Load Captcha</button>
                            <button class="btn btn-success" onclick="solveCaptcha()">Solve Captcha</button>
                        </div>
                        <div id="result" class="alert" style="display: none;"></div>
                    </div>
                </div>
            </div>
        </div>
    </div>

    <script>
        function loadCaptcha() {
            const urlParams = new URLSearchParams(window.location.search);
            const captchaUrl = urlParams.get('url') || document.getElementById('captcha-url').value;
            if (captchaUrl) {
                document.getElementById('captcha-image').src = captchaUrl;
            }
        }

        function solveCaptcha() {
            const solutions = ['HELLO', 'WORLD', 'TEST', 'CODE', 'SOLVE'];
            const solution = solutions[Math.floor(Math.random() * solutions.length)];
            const resultDiv = document.getElementById('result');
            resultDiv.className = 'alert alert-success';
            resultDiv.style.display = 'block';
            resultDiv.textContent = `Solved: ${solution}`;
        }

        window.addEventListener('load', loadCaptcha);
    </script>
</body>
</html>
"""

SALES_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Sales Summary</title>
    <link href="%BOOTSTRAP_CSS%" rel="stylesheet">
</head>
<body>
    <div class="container mt-5">
        <h1>Sales Summary</h1>
        <div id="total-sales" class="alert alert-info">
            <h3>Total Sales: $<span id="total-amount">%TOTAL%</span></h3>
        </div>
        <table class="table table-striped">
            <thead>
                <tr>
                    <th>Product</th>
                    <th>Sales</th>
                </tr>
            </thead>
            <tbody id="sales-table">
            </tbody>
        </table>
    </div>

    <script>
        const csvData = `%CSV_DATA%`;

        function parseCsvAndCalculate() {
            if (!csvData) return;

            const lines = csvData.split('\\n').filter(line => line.trim());
            const headers = lines[0].split(',').map(h => h.trim());
            const salesIndex = headers.findIndex(h => h.toLowerCase().includes('sales'));

            let total = 0;
            const tableBody = document.getElementById('sales-table');

            for (let i = 1; i < lines.length; i++) {
                const values = lines[i].split(',').map(v => v.trim());
                if (values.length > salesIndex && salesIndex >= 0) {
                    const sales = parseFloat(values[salesIndex]) || 0;
                    total += sales;

                    const row = document.createElement('tr');
                    row.innerHTML = `<td>${values[0] || 'Product ' + i}</td><td>$${sales}</td>`;
                    tableBody.appendChild(row);
                }
            }

            document.getElementById('total-amount').textContent = total.toFixed(2);
        }

        parseCsvAndCalculate();
    </script>
</body>
</html>
"""

MARKDOWN_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Markdown to HTML Converter</title>
    <link href="%BOOTSTRAP_CSS%" rel="stylesheet">
    <link rel="stylesheet" href="https://cdnjs.cloudflare.com/ajax/libs/highlight.js/11.9.0/styles/default.min.css">
</head>
<body>
    <div class="container mt-5">
        <h1>Markdown to HTML Converter</h1>
        <div id="markdown-output" class="border p-3"></div>
    </div>

    <script src="https://cdn.jsdelivr.net/npm/marked/marked.min.js"></script>
    <script src="https://cdnjs.cloudflare.com/ajax/libs/highlight.js/11.9.0/highlight.min.js"></script>
    <script>
        const markdownContent = `%MARKDOWN%`;

        function convertMarkdown() {
            const html = marked.parse(markdownContent || '# Sample Markdown\\n\\nThis is a sample markdown document.');
            document.getElementById('markdown-output').innerHTML = html;
            hljs.highlightAll();
        }

        convertMarkdown();
    </script>
</body>
</html>
"""

GITHUB_USER_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>GitHub User Info</title>
    <link href="%BOOTSTRAP_CSS%" rel="stylesheet">
</head>
<body>
    <div class="container mt-5">
        <div class="row justify-content-center">
            <div class="col-md-6">
                <div class="card">
                    <div class="card-header">
                        <h2>GitHub User Info</h2>
                    </div>
                    <div class="card-body">
                        <form id="github-user-%SEED%">
                            <div class="mb-3">
                                <label for="username" class="form-label">GitHub Username:</label>
                                <input type="text" class="form-control" id="username" required>
                            </div>
                            <button type="submit" class="btn btn-primary">Get User Info</button>
                        </form>
                        <div class="mt-3">
                            <p><strong>Account Created:</strong> <span id="github-created-at">-</span></p>
                        </div>
                    </div>
                </div>
            </div>
        </div>
    </div>

    <script>
        document.getElementById('github-user-%SEED%').addEventListener('submit', async function(e) {
            e.preventDefault();

            const username = document.getElementById('username').value;
            if (!username) return;

            try {
                const urlParams = new URLSearchParams(window.location.search);
                const token = urlParams.get('token');

                const headers = {};
                if (token) {
                    headers['Authorization'] = `token ${token}`;
                }

                const response = await fetch(`https://api.github.com/users/${username}`, { headers });
                const data = await response.json();

                if (data.created_at) {
                    const createdDate = new Date(data.created_at);
                    document.getElementById('github-created-at').textContent = createdDate.toISOString().split('T')[0];
                }
            } catch (error) {
                console.error('Error fetching user data:', error);
                document.getElementById('github-created-at').textContent = 'Error loading data';
            }
        });
    </script>
</body>
</html>
"""

GENERIC_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Generated App</title>
    <link href="%BOOTSTRAP_CSS%" rel="stylesheet">
</head>
<body>
    <div class="container mt-5">
        <div class="row">
            <div class="col-12">
                <div class="card">
                    <div class="card-header">
                        <h1>Generated Application</h1>
                    </div>
                    <div class="card-body">
                        <div class="alert alert-info">
                            <h4>Brief:</h4>
                            <p>%BRIEF%</p>
                        </div>

                        <div class="mt-4">
                            <h3>Attachments:</h3>
                            <div id="attachments-container">%ATTACHMENTS%
                            </div>
                        </div>

                        <div class="mt-4">
                            <button class="btn btn-success" onclick="processData()">Process Data</button>
                            <div id="output" class="mt-3"></div>
                        </div>
                    </div>
                </div>
            </div>
        </div>
    </div>

    <script>
        function processData() {
            document.getElementById('output').innerHTML =
                '<div class="alert alert-success">Data processed successfully!</div>';
        }
    </script>
</body>
</html>
"""

ATTACHMENT_CARD = """
                                <div class="card mt-2">
                                    <div class="card-header">
                                        <strong>%NAME%</strong> (%MIME%)
                                    </div>
                                    <div class="card-body">
                                        <pre><code>%PREVIEW%</code></pre>
                                    </div>
                                </div>"""

README = """# Generated Application

## Overview
This application was automatically generated based on the following brief:

%QUOTED_BRIEF%

## Features
- Responsive Bootstrap UI
- Dynamic content processing
- GitHub Pages deployment ready

## Setup
1. Clone this repository
2. Open index.html in a web browser
3. Or deploy to GitHub Pages for online access

## Usage
- The application is designed to fulfill the specific requirements outlined in the brief
- All functionality is contained within the HTML file for easy deployment

## Code Structure
- `index.html` - Main application file with embedded CSS and JavaScript
- `README.md` - This documentation file
- `LICENSE` - MIT License

## License
MIT License - see LICENSE file for details.
"""

MIT_LICENSE = """MIT License

Copyright (c) %YEAR% %AUTHOR%

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.
"""
