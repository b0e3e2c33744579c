"""
This script provides a complete, end-to-end example of how to use the
DocRaptor client to turn a snippet of HTML into a PDF.

The script performs the following steps:
1.  Lists the most recent documents on the account.
2.  Submits an asynchronous test document.
3.  Polls the job's status until it completes or fails.
4.  Downloads the finished PDF to 'example_output.pdf'.
"""
import os
import shutil
import time

import requests

# --- Import the client and its exceptions ---
from docraptor_client import (
    DocRaptorClient,
    DocumentRequest,
    JobStatus,
    NoApiKeyProvided,
    DocRaptorRequestError,
    MalformedResponse,
)

EXAMPLE_HTML = """
<html>
  <body>
    <h1>Invoice INV-2024-001234</h1>
    <table>
      <tr><td>Consulting</td><td>8 h</td><td>1,200.00 EUR</td></tr>
      <tr><td>Software licence</td><td>1</td><td>500.00 EUR</td></tr>
    </table>
  </body>
</html>
"""


def main():
    """
    Main function to execute the example workflow.
    """
    # --- Configuration ---
    # The client reads DOCRAPTOR_API_KEY and DOCRAPTOR_URL on its own
    output_path = os.path.join(os.path.dirname(__file__), "example_output.pdf")

    print("--- Initializing DocRaptor Client ---")
    api = DocRaptorClient()

    try:
        # 1. List existing documents
        print("\n1. Listing the last 5 documents...")
        listing = api.list_docs_strict({"per_page": 5})
        print(f"   -> Success! Listing returned {len(listing.content)} bytes.")

        # 2. Submit an async test document
        print("\n2. Submitting an asynchronous test document...")
        request = DocumentRequest(
            name="example_invoice.pdf",
            document_content=EXAMPLE_HTML,
            test=True,
            async_=True,
        )
        status_id = api.create_strict(request)
        print(f"   -> Success! Job queued with status id: {status_id}")

        # 3. Poll for completion, the client remembers the status id
        print("\n3. Polling for completion (checking every 2 seconds)...")
        record = api.status_strict()
        while record.status not in (JobStatus.COMPLETED.value, JobStatus.FAILED.value):
            print(f"   - Current status is '{record.status}'. Waiting...")
            time.sleep(2)
            record = api.status_strict()
        print(f"   -> Finished! Final job status: '{record.status}'")

        # 4. Download, the client remembers the download key
        if record.is_completed:
            print(f"\n4. Downloading to '{output_path}'...")

            def save(f, response):
                with open(output_path, "wb") as out:
                    shutil.copyfileobj(f, out)
                return response.status_code

            code = api.download(handler=save)
            print(f"   -> Done (HTTP {code}).")
        else:
            print(f"\nJob failed: {record.message}")

    # --- Error Handling ---
    except NoApiKeyProvided:
        print("\n[FATAL ERROR] Please set the DOCRAPTOR_API_KEY environment variable to run this example.")
    except DocRaptorRequestError as e:
        print(f"\n[FATAL ERROR] DocRaptor rejected the request (Status {e.status_code}). Details: {e.body}")
    except MalformedResponse as e:
        print(f"\n[FATAL ERROR] Unexpected response from DocRaptor: {e}")
    except requests.exceptions.RequestException as e:
        print(f"\n[FATAL ERROR] A network error occurred. Is '{api.root_url}' reachable? Details: {e}")
    finally:
        print("\nExample script finished.")


if __name__ == "__main__":
    main()
