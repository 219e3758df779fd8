from dotenv import load_dotenv

load_dotenv(".env.local"); load_dotenv()  # also loads .env if present

# app.py
import json
import os
from pathlib import Path
from urllib.parse import parse_qsl, urlencode, urlsplit

import streamlit as st
import streamlit.components.v1 as components

from taxflow_checkout import CheckoutConfig, CheckoutSession, PageLocation, session_storage

st.set_page_config(page_title="TaxFlow 2026 - W-4", layout="centered")

CONFIG = CheckoutConfig.from_env()
SESSION_DIR = Path(os.getenv("TAXFLOW_SESSION_DIR", ".taxflow_sessions"))

FILING_OPTIONS = {
    "single": "Single",
    "mfs": "Married filing separately",
    "married": "Married filing jointly",
    "widow": "Qualifying surviving spouse",
    "head": "Head of household",
}


class StreamlitPage(PageLocation):
    """Page location backed by st.query_params; navigation leaves the app."""

    def __init__(self, base_url: str):
        query = urlencode(st.query_params.to_dict())
        super().__init__(f"{base_url}?{query}" if query else base_url)

    def navigate(self, url: str) -> None:
        super().navigate(url)
        components.html(f"<script>window.parent.location.href = {json.dumps(url)};</script>", height=0)
        st.link_button("Continue to checkout", url)

    def replace_url(self, url: str) -> None:
        super().replace_url(url)
        st.query_params.from_dict(dict(parse_qsl(urlsplit(url).query)))


def save_pdf(pdf_bytes: bytes, filename: str) -> None:
    st.session_state["pdf"] = {"bytes": pdf_bytes, "filename": filename}


# The browser session id rides along in the URL so the hosted checkout
# brings us back to the same storage file.
sid, storage = session_storage(SESSION_DIR, st.query_params.get("sid"))
st.query_params["sid"] = sid

page = StreamlitPage(CONFIG.return_url.split("?")[0])
CONFIG.return_url = f"{CONFIG.return_url.split('?')[0]}?{urlencode({'sid': sid})}"

session = CheckoutSession(
    storage=storage,
    page=page,
    config=CONFIG,
    downloader=save_pdf,
)

st.title("TaxFlow 2026 - Pre-Filled W-4")

if session.is_returning_from_checkout():
    with st.spinner("Payment received. Preparing your W-4..."):
        session.handle_checkout_return(
            on_success=lambda _: st.success("Your W-4 is ready."),
            on_error=lambda err: st.error(str(err) or "PDF generation failed"),
        )

pdf = st.session_state.get("pdf")
if pdf:
    st.download_button("Download W-4", pdf["bytes"], file_name=pdf["filename"], mime="application/pdf")

# ------------- Form -------------
with st.form("w4"):
    st.subheader("Step 1: Personal information")
    c1, c2 = st.columns(2)
    first_name = c1.text_input("First name and middle initial")
    last_name = c2.text_input("Last name")
    address = st.text_input("Address")
    c3, c4, c5 = st.columns([3, 1, 2])
    city = c3.text_input("City or town")
    state = c4.text_input("State")
    zip_code = c5.text_input("ZIP code")
    ssn = st.text_input("Social security number", type="password")
    filing = st.selectbox("Filing status", options=list(FILING_OPTIONS), format_func=FILING_OPTIONS.get)

    st.subheader("Steps 2-4: Your calculation")
    multiple_jobs = st.checkbox("Multiple jobs or spouse works (Step 2c)")
    d1, d2 = st.columns(2)
    children_credit = d1.number_input("Qualifying children credit (3a)", min_value=0.0, step=100.0)
    other_credit = d2.number_input("Other dependents credit (3b)", min_value=0.0, step=100.0)
    other_income = d1.number_input("Other income (4a)", min_value=0.0, step=100.0)
    deductions = d2.number_input("Deductions (4b)", min_value=0.0, step=100.0)
    extra_withholding = st.number_input("Extra withholding per pay period (4c)", min_value=0.0, step=5.0)

    submitted = st.form_submit_button(f"Buy pre-filled W-4 (${CONFIG.price:.2f})")

if submitted:
    user_data = {
        "firstName": first_name,
        "lastName": last_name,
        "address": address,
        "city": city,
        "state": state,
        "zip": zip_code,
        "ssn": ssn,
        "filing": filing,
    }
    calc_results = {
        "multipleJobs": multiple_jobs,
        "childrenCredit": children_credit,
        "otherCredit": other_credit,
        "totalCredits": children_credit + other_credit,
        "otherIncome": other_income,
        "deductions": deductions,
        "extraWithholding": extra_withholding,
    }
    session.start_checkout_flow(
        user_data,
        calc_results,
        on_start=lambda: st.info("Redirecting to secure checkout..."),
        on_success=lambda *_: st.success("Your W-4 is ready."),
        on_error=lambda err: st.error(str(err) or "PDF generation failed"),
        on_close=lambda: st.warning("Checkout closed. Your answers are saved."),
    )
