# app.py: SmartInvoice Generator
# Upload Customer Master + Invoice (Pivot.) workbooks, preview the reconciled
# data, generate tax invoices / debit notes and download them.

import streamlit as st
import pandas as pd
from dataclasses import asdict

from smart_invoice.constants import ALL_STATES, DOC_KINDS, KNOWN_STATES
from smart_invoice.core_engine import match_statistics
from smart_invoice.errors import BillingDataError
from smart_invoice.pipeline import BillingSession, apply_upload, filter_documents, generate_documents
from smart_invoice.report_gen import generate_documents_zip, generate_summary_excel
from smart_invoice.state_classifier import extract_state_from_address
from smart_invoice.utils import configure_logging, format_inr, render_delay

configure_logging()

# ==========================================
# PAGE CONFIG & CSS
# ==========================================
st.set_page_config(
    page_title="SmartInvoice Generator",
    page_icon="🧾",
    layout="wide",
    initial_sidebar_state="collapsed"
)

st.markdown("""
    <style>
    .stApp { background-color: #f4f6f9; }
    div[data-testid="stMetric"] {
        background-color: #ffffff;
        border: 1px solid #e0e0e0;
        padding: 20px;
        border-radius: 12px;
        box-shadow: 0 4px 6px rgba(0,0,0,0.04);
    }
    div[data-testid="stMetricLabel"] { font-size: 14px; color: #6c757d; font-weight: 600; text-transform: uppercase; }
    div[data-testid="stMetricValue"] { font-size: 24px; color: #2c3e50; font-weight: 800; }
    div.stButton > button:first-child { border-radius: 8px; font-weight: 600; padding: 0.5rem 1rem; }
    .main-header { font-family: 'Helvetica Neue', sans-serif; color: #1a1a1a; font-weight: 700; margin-bottom: 0px; }
    .sub-header { font-family: 'Helvetica Neue', sans-serif; color: #666; font-size: 16px; margin-bottom: 20px; }
    </style>
""", unsafe_allow_html=True)

# ==========================================
# SESSION STATE INIT
# ==========================================
defaults = {
    'billing':          BillingSession(),
    'documents':        [],
    'customer_file_id': None,
    'invoice_file_id':  None,
    'upload_round':     0,
}
for k, v in defaults.items():
    if k not in st.session_state:
        st.session_state[k] = v


# ==========================================
# HELPERS
# ==========================================
def load_upload(uploaded, loader_name, id_key, label):
    """
    Parses an upload once per distinct file. A failure keeps the old session
    and leaves the file unrecorded, so the same upload is retried.
    """
    file_id = (uploaded.name, uploaded.size)
    if st.session_state[id_key] == file_id:
        return
    try:
        st.session_state.billing, st.session_state[id_key] = apply_upload(
            st.session_state.billing, loader_name, uploaded, file_id, st.session_state[id_key])
    except BillingDataError as e:
        st.error(f"❌ {e.user_message()}")
        return
    st.session_state.documents = []
    st.success(f"✅ {label} parsed successfully")


def records_frame(records):
    return pd.DataFrame([asdict(r) for r in records]) if records else pd.DataFrame()


def merged_frame(merged):
    rows = []
    for r in merged:
        rows.append({
            'SAP Code': r.sap_code, 'Customer': r.customer_name, 'District': r.district,
            'State': extract_state_from_address(r.customer.address),
            'GSTIN': r.customer.gstin, 'Godown Rent': r.godown_rent,
            'Main Bill': r.main_bill_amount, 'Freight Balance': r.freight_balance,
            'Total Value': r.total_value, 'Matched By': r.match_tier,
        })
    return pd.DataFrame(rows)


# ==========================================
# HEADER
# ==========================================
st.markdown("<h1 class='main-header'>🧾 SmartInvoice Generator</h1>", unsafe_allow_html=True)
st.markdown("<p class='sub-header'>Upload your Excel files, preview merged data, "
            "and generate invoices and debit notes automatically</p>", unsafe_allow_html=True)

# ==========================================
# STEP 1: UPLOAD
# ==========================================
st.markdown("### 📂 Step 1: Upload Excel Files")
col1, col2 = st.columns(2)
with col1:
    st.info("**Customer Master** *(first sheet is used)*")
    file_customers = st.file_uploader("Upload Customer Master (Excel)", type=["xlsx"],
                                      key=f"c_up_{st.session_state.upload_round}")
with col2:
    st.info("**Invoice / Cases Data** *(sheet 'Pivot.' required)*")
    file_invoices = st.file_uploader("Upload Invoice Data (Excel)", type=["xlsx"],
                                     key=f"i_up_{st.session_state.upload_round}")

if file_customers:
    load_upload(file_customers, 'with_customer_master', 'customer_file_id', "Customer Master")
if file_invoices:
    load_upload(file_invoices, 'with_invoice_data', 'invoice_file_id', "Invoice Data")

if st.button("🔄 Reset"):
    next_round = st.session_state.upload_round + 1
    for k, v in defaults.items():
        st.session_state[k] = v
    st.session_state.billing = st.session_state.billing.reset()
    st.session_state.upload_round = next_round
    st.rerun()

billing = st.session_state.billing

# ==========================================
# STEP 2: PREVIEW
# ==========================================
if billing.customers or billing.invoices:
    st.divider()
    st.markdown("### 📊 Step 2: Data Preview")

    totals = billing.summary()
    m1, m2, m3, m4 = st.columns(4)
    m1.metric("Godown Rent", f"₹ {format_inr(totals.godown_rent_total)}")
    m2.metric("Main Bill", f"₹ {format_inr(totals.main_bill_amount_total)}")
    m3.metric("Freight Balance", f"₹ {format_inr(totals.freight_balance_total)}")
    m4.metric("Combined Total", f"₹ {format_inr(totals.combined_total)}")

    st.download_button(
        "📥 Download Summary Excel",
        data=generate_summary_excel(totals),
        file_name="Invoice_Summary.xlsx",
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )

    t1, t2, t3 = st.tabs([f"Customers ({len(billing.customers)})",
                          f"Invoice Data ({len(billing.invoices)})",
                          f"Merged ({len(billing.merged)})"])
    with t1:
        st.dataframe(records_frame(billing.customers), use_container_width=True)
    with t2:
        st.dataframe(records_frame(billing.invoices), use_container_width=True)
    with t3:
        if billing.merged:
            stats = match_statistics(billing.merged)
            st.caption(f"Matched by name: {stats['name']} | by SAP code: {stats['sap_code']} | "
                       f"unmatched: {stats['unmatched']}")
            st.dataframe(merged_frame(billing.merged), use_container_width=True)

# ==========================================
# STEP 3: GENERATE
# ==========================================
if billing.merged:
    st.divider()
    st.markdown("### ⚡ Step 3: Generate Documents")
    kinds = st.multiselect("Document kinds", list(DOC_KINDS), default=list(DOC_KINDS),
                           format_func=lambda k: "Tax Invoice" if k == "invoice" else "Debit Note")

    if st.button("🚀 Generate", type="primary", disabled=not kinds):
        bar = st.progress(0, text="Generating documents...")
        st.session_state.documents = generate_documents(
            billing.merged, kinds=tuple(kinds), delay=render_delay(),
            progress=lambda done, total: bar.progress(done / total, text=f"{done} / {total}"),
        )
        bar.empty()
        st.success(f"✅ Generated {len(st.session_state.documents)} documents")

    documents = st.session_state.documents
    if documents:
        f1, f2 = st.columns([2, 1])
        search = f1.text_input("Search customer")
        state = f2.selectbox("State", [ALL_STATES] + KNOWN_STATES)
        shown = filter_documents(documents, billing.merged, search, state)

        st.download_button(
            f"📦 Download All ({len(shown)})",
            data=generate_documents_zip(shown),
            file_name="Generated_Documents.zip",
            mime="application/zip",
            disabled=not shown
        )
        for doc in shown:
            c1, c2, c3 = st.columns([4, 1, 1])
            c1.write(doc.file_name)
            c2.write(f"₹ {format_inr(doc.amount)}")
            c3.download_button("⬇️", data=doc.content, file_name=doc.file_name,
                               mime="application/pdf", key=doc.id)
